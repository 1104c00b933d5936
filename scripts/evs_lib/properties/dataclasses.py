"""
Property definition dataclasses for the EVS property compiler.

These describe the property table loaded from definitions.yaml, plus the
Unset sentinel used in canonical mappings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


class _UnsetType:
    """Marker for "reset this field to its system default"."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_UnsetType, ())


UNSET = _UnsetType()

# Canonical mapping values are plain strings or UNSET; absence is a missing key.
FieldValue = Union[str, _UnsetType]
CanonicalMapping = Dict[str, FieldValue]


def is_unset(value) -> bool:
    """Check for the Unset sentinel."""
    return value is UNSET


class FieldKind(Enum):
    """Validator used for a field. Values match definitions.yaml."""
    INTERFACE_NAME = "interface_name"
    VLAN_RANGE_LIST = "vlan_range_list"
    VXLAN_RANGE_LIST = "vxlan_range_list"
    YES_NO = "yes_no"
    HOSTNAME = "hostname"
    IP_OR_SUBNET = "ip_or_subnet"
    MULTICAST_ADDRESS = "multicast_address"
    SUBNET = "subnet"
    IP_ADDRESS = "ip_address"
    MAC_ADDRESS = "mac_address"
    UUID = "uuid"
    IP_POOL = "ip_pool"
    VLAN_ID = "vlan_id"
    VNI = "vni"
    BANDWIDTH = "bandwidth"
    URI_TEMPLATE = "uri_template"
    CONTROLLER_URI = "controller_uri"


class LegacyFormat(Enum):
    """How a plain string input is expanded into a canonical mapping."""
    SCALAR = "scalar"  # Whole string is the primary field
    POSITIONAL = "positional"  # ';'-separated fields in schema order
    URI = "uri"  # '<scheme>://[;][host]'


@dataclass(frozen=True)
class SchemaField:
    """One field of a property's schema."""
    name: str
    kind: FieldKind
    required: bool = False
    description: str = ""


@dataclass(frozen=True)
class PropertySpec:
    """A compiled property definition (one row of the property table)."""
    name: str
    fields: Tuple[SchemaField, ...]
    legacy_format: LegacyFormat = LegacyFormat.SCALAR
    legacy_strict: bool = False  # Positional strings must fill every position
    multiple: bool = False  # Accepts a list of values
    description: str = ""
    primary: Optional[str] = None  # Defaults to the property name

    @property
    def primary_field(self) -> str:
        """Name of the field emitted first in the -p list."""
        return self.primary or self.name

    @property
    def field_names(self) -> List[str]:
        """Field vocabulary in schema order."""
        return [f.name for f in self.fields]

    @property
    def required_fields(self) -> List[str]:
        return [f.name for f in self.fields if f.required]

    def get_field(self, name: str) -> Optional[SchemaField]:
        """Look up a schema field by name."""
        for schema_field in self.fields:
            if schema_field.name == name:
                return schema_field
        return None
