"""
Validation functions for EVS property values.

Address, range and syntax checks used by the field validator, the
exception hierarchy raised on failure, and structural validation of the
property table itself.
"""

import ipaddress
import re
from typing import List, Optional, Tuple

from .dataclasses import FieldKind, LegacyFormat


# =============================================================================
# Exceptions
# =============================================================================

class ValidationError(Exception):
    """Raised when a property value fails validation."""

    def __init__(self, message: str, field: Optional[str] = None, value=None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value


class FormatError(ValidationError):
    """Input does not match a recognized string or mapping shape."""
    pass


class RangeError(ValidationError):
    """Numeric range malformed, out of bounds or not increasing."""
    pass


class AddressError(ValidationError):
    """IP, subnet, MAC, UUID, multicast or hostname syntax failure."""
    pass


class RequiredFieldError(ValidationError):
    """A required field is absent."""
    pass


class PropertyDefinitionError(Exception):
    """Raised when the property table is malformed."""
    pass


# =============================================================================
# Address Validators
# =============================================================================

MAC_RE = re.compile(r'[0-9a-f]{2}([:-])(?:[0-9a-f]{2}\1){4}[0-9a-f]{2}', re.IGNORECASE)
UUID_RE = re.compile(r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}', re.IGNORECASE)
HOSTNAME_RE = re.compile(r'[\w.]+', re.ASCII)


def valid_ip(value: str) -> bool:
    """Validate an IPv4/IPv6 address, with or without a /prefix."""
    # Scoped addresses (fe80::1%eth0) are not accepted by evsadm
    if '%' in value:
        return False
    try:
        if '/' in value:
            ipaddress.ip_network(value, strict=False)
        else:
            ipaddress.ip_address(value)
        return True
    except ValueError:
        return False


def valid_ip_no_subnet(value: str) -> bool:
    """Validate a bare IPv4/IPv6 address (no /prefix allowed)."""
    return '/' not in value and valid_ip(value)


def valid_subnet(value: str) -> bool:
    """Validate an address/prefix pair. Host bits may be set."""
    if '/' not in value or '%' in value:
        return False
    _, prefix = value.rsplit('/', 1)
    if not prefix.isdigit() or not prefix.isascii():
        return False
    try:
        ipaddress.ip_network(value, strict=False)
        return True
    except ValueError:
        return False


def valid_mac(value: str) -> bool:
    """Validate a 6-octet MAC address with ':' or '-' separators."""
    return MAC_RE.fullmatch(value) is not None


def valid_uuid(value: str) -> bool:
    """Validate the canonical 8-4-4-4-12 UUID form."""
    return UUID_RE.fullmatch(value) is not None


def valid_multicast(value: str) -> bool:
    """Validate an address inside 224.0.0.0/4 or ff00::/8."""
    if '%' in value:
        return False
    try:
        return ipaddress.ip_address(value).is_multicast
    except ValueError:
        return False


def valid_hostname(value: str) -> bool:
    """
    Syntactic host name check: word characters and dots only.

    This does not resolve the name, so it may still be an invalid host.
    """
    return HOSTNAME_RE.fullmatch(value) is not None


# =============================================================================
# Range Validator
# =============================================================================

RANGE_TOKEN_RE = re.compile(r'\d+-\d+', re.ASCII)


def parse_range_list(value: str, bounds: Tuple[int, int], field: Optional[str] = None,
                     label: str = "ID") -> List[Tuple[int, int]]:
    """
    Parse and validate a comma-separated list of start-end ranges.

    Args:
        value: Range list (e.g., "10-20,30-40")
        bounds: Inclusive (lower, upper) limits for both ends
        field: Field name for error reporting
        label: What the numbers are, for messages (e.g., "VLAN ID")

    Returns:
        List of (start, end) tuples. An empty string gives an empty list.

    Raises:
        RangeError: On the first malformed, out of bound or non-increasing token
    """
    if value == "":
        return []

    lower, upper = bounds
    ranges = []
    for token in value.split(','):
        if not RANGE_TOKEN_RE.fullmatch(token):
            raise RangeError(f"{field}: {token} does not look like a range dddd-dddd",
                             field=field, value=token)
        start, end = (int(n) for n in token.split('-'))
        if not lower <= start <= upper:
            raise RangeError(f"{start} in {token} is not a valid {label} ({lower}-{upper})",
                             field=field, value=token)
        if not lower <= end <= upper:
            raise RangeError(f"{end} in {token} is not a valid {label} ({lower}-{upper})",
                             field=field, value=token)
        if not start < end:
            raise RangeError(f"{token}: start must be less than end",
                             field=field, value=token)
        ranges.append((start, end))
    return ranges


def parse_bounded_int(value: str, bounds: Tuple[int, int], field: Optional[str] = None,
                      label: str = "ID") -> int:
    """Parse a single integer within inclusive bounds."""
    lower, upper = bounds
    if not value.isascii() or not value.isdigit():
        raise RangeError(f"{field}: {value} must be an integer", field=field, value=value)
    number = int(value)
    if not lower <= number <= upper:
        raise RangeError(f"{field}: {value} must be between {lower}-{upper} inclusive",
                         field=field, value=value)
    return number


def parse_ip_pool(value: str, field: Optional[str] = None) -> List[Tuple[str, str]]:
    """
    Parse a comma-separated pool of addresses or address ranges.

    i.e. 192.168.1.20-192.168.1.30,192.168.1.50-192.168.1.80
    """
    pool = []
    for token in value.split(','):
        ends = token.split('-')
        if len(ends) > 2:
            raise AddressError(f"{field}: {token} is not an address or address range",
                               field=field, value=token)
        for addr in ends:
            if not valid_ip_no_subnet(addr):
                raise AddressError(f"{field}: {addr} is not a valid IP address",
                                   field=field, value=token)
        start = ipaddress.ip_address(ends[0])
        end = ipaddress.ip_address(ends[-1])
        if start.version != end.version:
            raise AddressError(f"{field}: {token} mixes IPv4 and IPv6",
                               field=field, value=token)
        if start > end:
            raise AddressError(f"{field}: {token} start greater than end",
                               field=field, value=token)
        pool.append((str(start), str(end)))
    return pool


# =============================================================================
# Property Table Validation
# =============================================================================

def validate_property_definition(data: dict) -> List[str]:
    """
    Validate one property definition from definitions.yaml.
    Returns list of error messages (empty if valid).
    """
    errors = []

    name = data.get('name')
    if not name:
        return ["Missing required field: name"]

    if not re.match(r'^[a-z][a-z0-9-]*$', name):
        errors.append(f"Invalid property name '{name}': must start with lowercase letter, contain only a-z, 0-9, -")

    fields = data.get('fields', [])
    if not fields:
        errors.append(f"{name}: fields must have at least one field")
        return errors

    valid_kinds = [k.value for k in FieldKind]
    field_names = []
    for i, field_def in enumerate(fields):
        if not isinstance(field_def, dict) or 'name' not in field_def:
            errors.append(f"{name}.fields[{i}]: missing 'name' field")
            continue
        if field_def['name'] in field_names:
            errors.append(f"{name}: duplicate field name: {field_def['name']}")
        field_names.append(field_def['name'])
        kind = field_def.get('kind')
        if kind not in valid_kinds:
            errors.append(f"{name}.fields[{i}]: invalid kind '{kind}'")

    primary = data.get('primary', name)
    if primary not in field_names:
        errors.append(f"{name}: primary field '{primary}' is not in fields")

    legacy = data.get('legacy_format', 'scalar')
    if legacy not in [f.value for f in LegacyFormat]:
        errors.append(f"{name}: invalid legacy_format '{legacy}'")
    elif legacy == 'uri' and 'host' not in field_names:
        errors.append(f"{name}: legacy_format 'uri' requires a 'host' field")

    return errors
