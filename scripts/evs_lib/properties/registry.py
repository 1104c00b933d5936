"""
Property registry for EVS tools.

Functions for loading the property table from YAML and looking up
property specs by name.
"""

from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping

import yaml

from .constants import DEFINITIONS_FILE
from .dataclasses import FieldKind, LegacyFormat, PropertySpec, SchemaField
from .validation import PropertyDefinitionError, validate_property_definition


def parse_property_definition(data: dict) -> PropertySpec:
    """Parse a property definition from YAML data dict."""
    fields = tuple(
        SchemaField(
            name=f['name'],
            kind=FieldKind(f['kind']),
            required=f.get('required', False),
            description=f.get('description', '')
        )
        for f in data['fields']
    )

    return PropertySpec(
        name=data['name'],
        fields=fields,
        legacy_format=LegacyFormat(data.get('legacy_format', 'scalar')),
        legacy_strict=data.get('legacy_strict', False),
        multiple=data.get('multiple', False),
        description=data.get('description', ''),
        primary=data.get('primary'),
    )


def parse_property_table(data: dict) -> Dict[str, PropertySpec]:
    """
    Parse and validate a whole property table.

    Raises:
        PropertyDefinitionError: If any definition is invalid or duplicated
    """
    if not isinstance(data, dict) or not isinstance(data.get('properties'), list):
        raise PropertyDefinitionError("Property table must contain a 'properties' list")

    errors = []
    specs = {}
    for i, prop_data in enumerate(data['properties']):
        if not isinstance(prop_data, dict):
            errors.append(f"properties[{i}]: must be a mapping")
            continue
        prop_errors = validate_property_definition(prop_data)
        if prop_errors:
            errors.extend(prop_errors)
            continue
        if prop_data['name'] in specs:
            errors.append(f"Duplicate property name: {prop_data['name']}")
            continue
        specs[prop_data['name']] = parse_property_definition(prop_data)

    if errors:
        raise PropertyDefinitionError("Invalid property table:\n  " + "\n  ".join(errors))

    return specs


def load_property_specs(path: Path = DEFINITIONS_FILE) -> Dict[str, PropertySpec]:
    """
    Load the property table from a YAML file.

    Args:
        path: Path to the definitions file

    Returns:
        Mapping of property name to PropertySpec, in file order
    """
    with open(path) as f:
        data = yaml.safe_load(f)
    return parse_property_table(data)


@lru_cache(maxsize=None)
def _default_specs() -> Mapping[str, PropertySpec]:
    return MappingProxyType(load_property_specs(DEFINITIONS_FILE))


def get_property_specs() -> Mapping[str, PropertySpec]:
    """Get the built-in property table (loaded once, read-only)."""
    return _default_specs()


def get_property_spec(name: str) -> PropertySpec:
    """
    Look up a built-in property spec.

    Accepts the resource attribute spelling too (uplink_port for uplink-port).

    Raises:
        KeyError: If no such property exists
    """
    specs = get_property_specs()
    key = name.replace('_', '-')
    if key not in specs:
        raise KeyError(f"Unknown property '{name}'. Available: {', '.join(specs)}")
    return specs[key]


def list_properties() -> List[str]:
    """List the names of all built-in properties."""
    return list(get_property_specs())
