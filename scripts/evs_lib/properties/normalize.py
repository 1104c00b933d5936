"""
Input normalization for EVS properties.

Property values arrive either as a plain string (a scalar, or one of the
deprecated in-string formats) or as a mapping of field name to value.
Both are converted into one canonical mapping, ordered by the property's
field schema, before anything is validated.
"""

import re
from collections.abc import Mapping
from typing import Callable, Optional, Tuple

from evs_lib.common import deprecation_warning

from .constants import HOST_FIELD, LEGACY_DELIMITER
from .dataclasses import UNSET, CanonicalMapping, LegacyFormat, PropertySpec, is_unset
from .validation import FormatError


URI_RE = re.compile(r'(?P<scheme>[^:/;]*)://(?P<sep>;)?(?P<host>.*)', re.DOTALL)


def _coerce_value(name: str, value):
    """Accept strings, integers and UNSET as field values."""
    if is_unset(value) or isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise FormatError(f"{name}: {value!r} must be a string", field=name, value=value)


def split_uri_template(value: str) -> Tuple[str, Optional[str], bool]:
    """
    Split '<scheme>://[;][host]' into template and host.

    Returns:
        Tuple of (template, host or None, used ';' separator)
    """
    match = URI_RE.fullmatch(value)
    if not match:
        return value, None, False
    template = f"{match.group('scheme')}://"
    return template, match.group('host') or None, match.group('sep') is not None


def _from_positional(value: str, spec: PropertySpec,
                     warn: Callable[[str], None]) -> CanonicalMapping:
    value = value.strip()
    if LEGACY_DELIMITER not in value:
        # Simple format: just the primary field
        return {spec.primary_field: value} if value else {}

    warn(f"{spec.name}: '{LEGACY_DELIMITER}' separated string format is deprecated. "
         f"Move to mapping style arguments.")

    names = spec.field_names
    positions = value.split(LEGACY_DELIMITER)
    if len(positions) > len(names) or (spec.legacy_strict and len(positions) != len(names)):
        expected = LEGACY_DELIMITER.join(f"<{n}>" for n in names)
        raise FormatError(
            f"{spec.name}: expected {len(names)} '{LEGACY_DELIMITER}' separated fields "
            f"({expected}), got {len(positions)}",
            field=spec.name, value=value)

    # Empty positions are absent, not unset
    return {names[idx]: part for idx, part in enumerate(positions) if part}


def _from_uri(value: str, spec: PropertySpec,
              warn: Callable[[str], None]) -> CanonicalMapping:
    template, host, used_separator = split_uri_template(value)
    if used_separator:
        warn(f"{spec.name}: remove '{LEGACY_DELIMITER}' from '{value}'")
    mapping = {spec.primary_field: template}
    if host is not None:
        mapping[HOST_FIELD] = host
    return mapping


def check_vocabulary(mapping: Mapping, spec: PropertySpec) -> None:
    """Reject any key that is not a field of the property."""
    unknown = [k for k in mapping if k not in spec.field_names]
    if unknown:
        raise FormatError(
            f"{spec.name}: unknown field(s) {', '.join(repr(k) for k in unknown)}. "
            f"Valid fields: {', '.join(spec.field_names)}",
            field=str(unknown[0]), value=mapping[unknown[0]])


def _from_mapping(value: Mapping, spec: PropertySpec,
                  warn: Callable[[str], None]) -> CanonicalMapping:
    check_vocabulary(value, spec)

    fields = {k: _coerce_value(k, v) for k, v in value.items()}

    if spec.legacy_format == LegacyFormat.URI:
        primary = fields.get(spec.primary_field)
        if isinstance(primary, str):
            template, host, used_separator = split_uri_template(primary)
            if used_separator:
                warn(f"{spec.name}: remove '{LEGACY_DELIMITER}' from '{primary}'")
            fields[spec.primary_field] = template
            # A non-empty host key wins over one embedded in the template
            if host is not None and fields.get(HOST_FIELD) in (None, ""):
                fields[HOST_FIELD] = host

    return fields


def normalize(value, spec: PropertySpec,
              warn: Callable[[str], None] = deprecation_warning) -> CanonicalMapping:
    """
    Convert a raw property value into a canonical mapping.

    Args:
        value: String, integer, mapping or UNSET
        spec: Property definition
        warn: Deprecation channel for legacy string formats

    Returns:
        Dict of field name to string/UNSET in schema order

    Raises:
        FormatError: Unknown fields, wrong field count or unsupported input type
    """
    if is_unset(value):
        fields = {spec.primary_field: UNSET}
    elif isinstance(value, Mapping):
        fields = _from_mapping(value, spec, warn)
    elif isinstance(value, (str, int)) and not isinstance(value, bool):
        value = str(value)
        if spec.legacy_format == LegacyFormat.POSITIONAL:
            fields = _from_positional(value, spec, warn)
        elif spec.legacy_format == LegacyFormat.URI:
            fields = _from_uri(value, spec, warn)
        else:
            fields = {spec.primary_field: value}
    else:
        raise FormatError(f"{spec.name}: {value!r}:{type(value).__name__} must be a string or mapping",
                          field=spec.name, value=value)

    host = fields.get(HOST_FIELD)
    if is_unset(host):
        raise FormatError(f"{spec.name}: {HOST_FIELD} cannot be unset",
                          field=HOST_FIELD, value=host)
    if host == "":
        del fields[HOST_FIELD]

    return {name: fields[name] for name in spec.field_names if name in fields}
