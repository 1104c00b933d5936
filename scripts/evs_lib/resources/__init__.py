"""
evs_lib.resources - EVS resource manifests.

This package contains:
- dataclasses: Resource types and resource declarations
- manifest: YAML manifest loading and evsadm command construction
"""

from .dataclasses import (
    PropertyGroup,
    ResourceType,
    ResourceDeclaration,
    RESOURCE_TYPES,
    resource_type_names,
)

from .manifest import (
    ManifestError,
    from_yaml_value,
    parse_resource,
    parse_manifest,
    load_manifest,
    get_resource_type,
    compile_resource,
    build_commands,
    validate_resources,
)

__all__ = [
    # Dataclasses
    'PropertyGroup',
    'ResourceType',
    'ResourceDeclaration',
    'RESOURCE_TYPES',
    'resource_type_names',
    # Manifest
    'ManifestError',
    'from_yaml_value',
    'parse_resource',
    'parse_manifest',
    'load_manifest',
    'get_resource_type',
    'compile_resource',
    'build_commands',
    'validate_resources',
]
