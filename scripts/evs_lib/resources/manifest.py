"""
Manifest loading for EVS resources.

Functions for loading resource declarations from YAML, validating them
against the resource types, and building evsadm command lines from the
compiled property values.
"""

from pathlib import Path
from typing import Any, List

import yaml

from evs_lib.common import EVSADM_BIN
from evs_lib.properties import UNSET, CompiledProperty, ValidationError, get_property_spec

from .dataclasses import RESOURCE_TYPES, ResourceDeclaration, ResourceType


TENANT_FLAG = "-T"


class ManifestError(ValidationError):
    """Raised when a manifest or resource declaration is invalid."""
    pass


def from_yaml_value(value: Any) -> Any:
    """
    Convert a value parsed from YAML into compiler input.

    null means Unset, and YAML 1.1 booleans (yes/no) become 'yes'/'no'.
    """
    if value is None:
        return UNSET
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, dict):
        return {str(k): from_yaml_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_yaml_value(v) for v in value]
    return value


def parse_resource(data: dict) -> ResourceDeclaration:
    """Parse a resource declaration from YAML data dict."""
    if not isinstance(data, dict):
        raise ManifestError(f"Resource must be a mapping, got {type(data).__name__}", value=data)
    for key in ('type', 'name'):
        if key not in data:
            raise ManifestError(f"Resource missing required field: {key}", field=key, value=data)

    properties = data.get('properties') or {}
    if not isinstance(properties, dict):
        raise ManifestError(f"{data['type']}[{data['name']}]: properties must be a mapping",
                            field='properties', value=properties)

    return ResourceDeclaration(
        type=str(data['type']),
        name=str(data['name']),
        properties={str(k): from_yaml_value(v) for k, v in properties.items()},
    )


def parse_manifest(data: dict) -> List[ResourceDeclaration]:
    """Parse a whole manifest ('resources:' list)."""
    if not isinstance(data, dict) or not isinstance(data.get('resources'), list):
        raise ManifestError("Manifest must contain a 'resources' list")
    return [parse_resource(r) for r in data['resources']]


def load_manifest(path: Path) -> List[ResourceDeclaration]:
    """Load resource declarations from a YAML manifest file."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return parse_manifest(data)


def get_resource_type(name: str) -> ResourceType:
    """Look up a resource type by name."""
    if name not in RESOURCE_TYPES:
        raise ManifestError(
            f"Unknown resource type '{name}'. Available: {', '.join(RESOURCE_TYPES)}",
            field='type', value=name)
    return RESOURCE_TYPES[name]


def compile_resource(resource: ResourceDeclaration) -> List[CompiledProperty]:
    """
    Validate a resource and compile each of its properties.

    Raises:
        ManifestError: Bad type, name, property name or missing property
        ValidationError: A property value is invalid
    """
    rtype = get_resource_type(resource.type)
    if not rtype.valid_name(resource.name):
        raise ManifestError(
            f"{resource}: invalid name, convention must be {rtype.name_convention}",
            field='name', value=resource.name)

    group = rtype.group_for(resource.name)
    compiled = []
    for prop_name, value in resource.properties.items():
        key = prop_name.replace('_', '-')
        if key not in group.properties:
            raise ManifestError(
                f"{resource}: property '{prop_name}' is not valid here. "
                f"Available: {', '.join(group.properties)}",
                field=prop_name, value=value)
        try:
            compiled.append(CompiledProperty(get_property_spec(key), value))
        except ValidationError as e:
            raise type(e)(f"{resource}: {e.message}", field=e.field, value=e.value) from e

    present = {p.name for p in compiled}
    for required in rtype.required:
        if required not in present:
            raise ManifestError(f"{resource}: {required} must be provided", field=required)

    return compiled


def build_commands(resource: ResourceDeclaration, evsadm: str = EVSADM_BIN) -> List[List[str]]:
    """
    Build the evsadm command lines that apply a resource's properties.

    Returns:
        One argv list per compiled argument sequence, e.g.
        ["/usr/sbin/evsadm", "set-ipnetprop", "-T", "tenant", "-p", "pool=...", "evs/net"]
    """
    compiled = compile_resource(resource)
    group = RESOURCE_TYPES[resource.type].group_for(resource.name)

    prefix = [evsadm, group.subcommand]
    if resource.tenant:
        prefix += [TENANT_FLAG, resource.tenant]
    suffix = [resource.target] if resource.target else []

    commands = []
    for prop in compiled:
        for args in prop.arguments:
            commands.append(prefix + args + suffix)
    return commands


def validate_resources(resources: List[ResourceDeclaration]) -> List[str]:
    """
    Validate every resource in a manifest.
    Returns list of error messages (empty if valid).
    """
    errors = []
    for resource in resources:
        try:
            compile_resource(resource)
        except ValidationError as e:
            errors.append(e.message)
    return errors
