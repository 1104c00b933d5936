"""
EVS property compiler.

Validates canonical mappings field by field and serializes them into the
argument sequence passed to evsadm:

    [-h <host>] -p <primary>=<value>[,<field>=<value>...]

Every compile call is a pure function of its input; the only side effect
is the deprecation warning raised while normalizing legacy strings.
"""

import re
from collections.abc import Mapping
from typing import Callable, Dict, List, Union

from evs_lib.common import deprecation_warning

from .constants import (
    FIELD_SEPARATOR,
    HOST_FIELD,
    HOST_FLAG,
    PROPERTY_FLAG,
    VALUE_SEPARATOR,
    VLAN_ID_RANGE,
    VXLAN_ID_RANGE,
)
from .dataclasses import CanonicalMapping, FieldKind, PropertySpec, SchemaField, is_unset
from .normalize import check_vocabulary, normalize
from .registry import get_property_spec
from .validation import (
    AddressError,
    FormatError,
    RangeError,
    RequiredFieldError,
    parse_bounded_int,
    parse_ip_pool,
    parse_range_list,
    valid_hostname,
    valid_ip,
    valid_ip_no_subnet,
    valid_mac,
    valid_multicast,
    valid_subnet,
    valid_uuid,
)


INTERFACE_RE = re.compile(r'\w+\d', re.ASCII)
BANDWIDTH_RE = re.compile(r'\d+[kmgKMG]?', re.ASCII)
URI_TEMPLATE_RE = re.compile(r'(?:unix|ssh)://')
CONTROLLER_RE = re.compile(r'unix://|ssh://(?:[\w.]+@)?[\w.]+', re.ASCII)


# =============================================================================
# Field Validators
# =============================================================================

def _check(predicate: Callable[[str], bool], error_cls, message: str):
    """Build a validator that raises error_cls when predicate fails."""
    def check(schema_field: SchemaField, value: str) -> None:
        if not predicate(value):
            raise error_cls(message.format(field=schema_field.name, value=value),
                            field=schema_field.name, value=value)
    return check


def _range_list(bounds, label: str):
    def check(schema_field: SchemaField, value: str) -> None:
        if value == "" and schema_field.required:
            raise RangeError(f"{schema_field.name}: at least one range dddd-dddd is required",
                             field=schema_field.name, value=value)
        parse_range_list(value, bounds, schema_field.name, label)
    return check


def _bounded_int(bounds, label: str):
    def check(schema_field: SchemaField, value: str) -> None:
        parse_bounded_int(value, bounds, schema_field.name, label)
    return check


def _ip_pool(schema_field: SchemaField, value: str) -> None:
    parse_ip_pool(value, schema_field.name)


FIELD_VALIDATORS = {
    FieldKind.INTERFACE_NAME: _check(
        lambda v: INTERFACE_RE.fullmatch(v) is not None, FormatError,
        "{field}: {value} does not look like a network interface"),
    FieldKind.VLAN_RANGE_LIST: _range_list(VLAN_ID_RANGE, "VLAN ID"),
    FieldKind.VXLAN_RANGE_LIST: _range_list(VXLAN_ID_RANGE, "VXLAN ID"),
    FieldKind.YES_NO: _check(
        lambda v: v in ("yes", "no"), FormatError,
        "{field}: {value} can only be yes/no"),
    FieldKind.HOSTNAME: _check(
        valid_hostname, AddressError,
        "{field}: {value} does not look like a host name"),
    FieldKind.IP_OR_SUBNET: _check(
        valid_ip, AddressError,
        "{field}: {value} is not a valid IP or subnet"),
    FieldKind.MULTICAST_ADDRESS: _check(
        valid_multicast, AddressError,
        "{field}: {value} is not a multicast address"),
    FieldKind.SUBNET: _check(
        valid_subnet, AddressError,
        "{field}: {value} is not a valid network/mask"),
    FieldKind.IP_ADDRESS: _check(
        valid_ip_no_subnet, AddressError,
        "{field}: {value} is not a valid IP address (no subnet identifier allowed)"),
    FieldKind.MAC_ADDRESS: _check(
        valid_mac, AddressError,
        "{field}: {value} does not look like a MAC address"),
    FieldKind.UUID: _check(
        valid_uuid, AddressError,
        "{field}: {value} does not look like a UUID"),
    FieldKind.IP_POOL: _ip_pool,
    FieldKind.VLAN_ID: _bounded_int(VLAN_ID_RANGE, "VLAN ID"),
    FieldKind.VNI: _bounded_int(VXLAN_ID_RANGE, "VXLAN ID"),
    FieldKind.BANDWIDTH: _check(
        lambda v: BANDWIDTH_RE.fullmatch(v) is not None, FormatError,
        "{field}: {value} must be a number with an optional k/m/g unit"),
    FieldKind.URI_TEMPLATE: _check(
        lambda v: URI_TEMPLATE_RE.fullmatch(v) is not None, FormatError,
        "{field}: {value} must be unix:// or ssh://"),
    FieldKind.CONTROLLER_URI: _check(
        lambda v: CONTROLLER_RE.fullmatch(v) is not None, FormatError,
        "{field}: {value} must be unix:// or ssh://[user@]host"),
}


def validate_fields(mapping: Mapping, spec: PropertySpec) -> None:
    """
    Validate every field of a canonical mapping against the property schema.

    Unknown fields are rejected before any field is checked. Unset fields
    are not validated.

    Raises:
        FormatError, RangeError, AddressError, RequiredFieldError
    """
    check_vocabulary(mapping, spec)

    for schema_field in spec.fields:
        if schema_field.name not in mapping:
            if schema_field.required:
                raise RequiredFieldError(f"{schema_field.name} must be provided",
                                         field=schema_field.name)
            continue

        value = mapping[schema_field.name]
        if is_unset(value):
            continue
        if not isinstance(value, str):
            raise FormatError(f"{schema_field.name}: {value!r} must be a string",
                              field=schema_field.name, value=value)
        FIELD_VALIDATORS[schema_field.kind](schema_field, value)


# =============================================================================
# Argument Compiler
# =============================================================================

def _render(name: str, value) -> str:
    # Unset resets to the system default: key kept, value empty
    return f"{name}{VALUE_SEPARATOR}{'' if is_unset(value) else value}"


def compile_arguments(mapping: Mapping, spec: PropertySpec) -> List[str]:
    """
    Serialize a validated canonical mapping into evsadm arguments.

    The host field becomes a leading '-h <host>' pair. All other fields
    are joined into a single '-p' value, primary field first, then schema
    order. Absent fields are omitted; Unset fields render as 'key='.
    """
    check_vocabulary(mapping, spec)

    args = []
    host = mapping.get(HOST_FIELD)
    if host and not is_unset(host):
        args.extend([HOST_FLAG, host])

    primary = spec.primary_field
    order = [primary] + [n for n in spec.field_names if n != primary]
    parts = [_render(name, mapping[name]) for name in order
             if name in mapping and name != HOST_FIELD]

    args.extend([PROPERTY_FLAG, FIELD_SEPARATOR.join(parts)])
    return args


# =============================================================================
# Entry Points
# =============================================================================

def _resolve(prop: Union[str, PropertySpec]) -> PropertySpec:
    if isinstance(prop, PropertySpec):
        return prop
    return get_property_spec(prop)


def canonicalize(prop: Union[str, PropertySpec], value,
                 warn: Callable[[str], None] = deprecation_warning) -> CanonicalMapping:
    """Normalize and validate a raw value, returning the canonical mapping."""
    spec = _resolve(prop)
    mapping = normalize(value, spec, warn)
    validate_fields(mapping, spec)
    return mapping


def compile_property(prop: Union[str, PropertySpec], value,
                     warn: Callable[[str], None] = deprecation_warning) -> List[str]:
    """
    Compile one raw property value into an evsadm argument sequence.

    Args:
        prop: Property name (e.g., "uplink-port") or PropertySpec
        value: String, mapping or UNSET
        warn: Deprecation channel for legacy string formats

    Returns:
        Argument list, e.g. ["-h", "foo", "-p", "uplink-port=net0,vlan-range=10-20"]

    Raises:
        ValidationError: Any subclass, on the first invalid field
    """
    spec = _resolve(prop)
    return compile_arguments(canonicalize(spec, value, warn), spec)


def compile_property_list(prop: Union[str, PropertySpec], values,
                          warn: Callable[[str], None] = deprecation_warning) -> List[List[str]]:
    """
    Compile a list of values into one argument sequence per value.

    A single string or mapping is treated as a one-element list. Nothing
    is returned unless every value compiles.
    """
    spec = _resolve(prop)
    if not isinstance(values, (list, tuple)):
        values = [values]
    if not values:
        raise FormatError(f"{spec.name}: at least one value is required",
                          field=spec.name, value=values)
    if len(values) > 1 and not spec.multiple:
        raise FormatError(f"{spec.name} does not accept multiple values",
                          field=spec.name, value=values)
    return [compile_property(spec, v, warn) for v in values]


def _quiet(msg: str) -> None:
    pass


class CompiledProperty:
    """
    A validated property value.

    Holds only the raw input; argument sequences are regenerated on
    every access.
    """

    def __init__(self, prop: Union[str, PropertySpec], value,
                 warn: Callable[[str], None] = deprecation_warning):
        self.spec = _resolve(prop)
        compile_property_list(self.spec, value, warn)
        self.value = value

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def arguments(self) -> List[List[str]]:
        """One evsadm argument sequence per value."""
        return compile_property_list(self.spec, self.value, _quiet)

    @property
    def canonical(self) -> List[Dict]:
        values = self.value if isinstance(self.value, (list, tuple)) else [self.value]
        return [canonicalize(self.spec, v, _quiet) for v in values]

    def __repr__(self) -> str:
        return f"CompiledProperty({self.name!r}, {self.value!r})"
