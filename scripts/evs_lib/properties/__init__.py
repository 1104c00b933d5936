"""
evs_lib.properties - EVS property compiler.

This package contains:
- constants: ID bounds, delimiters and the property table path
- dataclasses: Property definition structures and the UNSET sentinel
- validation: Address/range validators and the ValidationError hierarchy
- registry: Loading the property table (definitions.yaml)
- normalize: Conversion of string/mapping input into canonical mappings
- compiler: Field validation and evsadm argument compilation
"""

from .constants import (
    VLAN_ID_RANGE,
    VXLAN_ID_RANGE,
    DEFINITIONS_FILE,
)

from .dataclasses import (
    UNSET,
    is_unset,
    FieldKind,
    LegacyFormat,
    SchemaField,
    PropertySpec,
)

from .validation import (
    ValidationError,
    FormatError,
    RangeError,
    AddressError,
    RequiredFieldError,
    PropertyDefinitionError,
    valid_ip,
    valid_ip_no_subnet,
    valid_subnet,
    valid_mac,
    valid_uuid,
    valid_multicast,
    valid_hostname,
    parse_range_list,
    parse_bounded_int,
    parse_ip_pool,
    validate_property_definition,
)

from .registry import (
    parse_property_definition,
    parse_property_table,
    load_property_specs,
    get_property_specs,
    get_property_spec,
    list_properties,
)

from .normalize import (
    normalize,
    split_uri_template,
)

from .compiler import (
    validate_fields,
    compile_arguments,
    canonicalize,
    compile_property,
    compile_property_list,
    CompiledProperty,
)

__all__ = [
    # Constants
    'VLAN_ID_RANGE',
    'VXLAN_ID_RANGE',
    'DEFINITIONS_FILE',
    # Dataclasses
    'UNSET',
    'is_unset',
    'FieldKind',
    'LegacyFormat',
    'SchemaField',
    'PropertySpec',
    # Validation
    'ValidationError',
    'FormatError',
    'RangeError',
    'AddressError',
    'RequiredFieldError',
    'PropertyDefinitionError',
    'valid_ip',
    'valid_ip_no_subnet',
    'valid_subnet',
    'valid_mac',
    'valid_uuid',
    'valid_multicast',
    'valid_hostname',
    'parse_range_list',
    'parse_bounded_int',
    'parse_ip_pool',
    'validate_property_definition',
    # Registry
    'parse_property_definition',
    'parse_property_table',
    'load_property_specs',
    'get_property_specs',
    'get_property_spec',
    'list_properties',
    # Normalization
    'normalize',
    'split_uri_template',
    # Compiler
    'validate_fields',
    'compile_arguments',
    'canonicalize',
    'compile_property',
    'compile_property_list',
    'CompiledProperty',
]
