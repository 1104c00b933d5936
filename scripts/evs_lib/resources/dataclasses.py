"""
Resource dataclasses for EVS manifests.

A resource is one EVS object (the controller/client property sets, an EVS,
an IPnet or a VPort) together with the property values to set on it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class PropertyGroup:
    """Properties set through one evsadm subcommand."""
    subcommand: str  # e.g., "set-controlprop"
    properties: Tuple[str, ...]


@dataclass(frozen=True)
class ResourceType:
    """A kind of EVS object and the properties it can carry."""
    name: str  # e.g., "evs_ipnet"
    description: str
    name_convention: str  # e.g., "<tenant>/<evs>/<ipnet>"
    groups: Dict[str, PropertyGroup]  # Keyed by instance name, or "*" for any
    name_parts: int = 0  # '/' separated parts; 0 means fixed instance names
    required: Tuple[str, ...] = ()

    def group_for(self, resource_name: str) -> Optional[PropertyGroup]:
        """Get the property group that applies to a resource name."""
        return self.groups.get(resource_name) or self.groups.get("*")

    def valid_name(self, resource_name: str) -> bool:
        """Check a resource name against the naming convention."""
        if not self.name_parts:
            return resource_name in self.groups
        parts = resource_name.split("/")
        return len(parts) == self.name_parts and all(parts)


@dataclass
class ResourceDeclaration:
    """A resource from a manifest, with its raw property values."""
    type: str
    name: str
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def tenant(self) -> Optional[str]:
        """Tenant part of a '<tenant>/...' name (None for property sets)."""
        if "/" not in self.name:
            return None
        return self.name.split("/", 1)[0]

    @property
    def target(self) -> Optional[str]:
        """Name without the tenant, as passed to evsadm."""
        if "/" not in self.name:
            return None
        return self.name.split("/", 1)[1]

    def __str__(self) -> str:
        return f"{self.type}[{self.name}]"


# =============================================================================
# Known Resource Types
# =============================================================================

CONTROLLER_PROPERTIES = (
    "uplink-port", "uri-template", "vlan-range",
    "vxlan-addr", "vxlan-mgroup", "vxlan-range",
)
CLIENT_PROPERTIES = ("controller",)

RESOURCE_TYPES: Dict[str, ResourceType] = {
    "evs_properties": ResourceType(
        name="evs_properties",
        description="Global EVS controller and client properties",
        name_convention="controller_property or client_property",
        groups={
            "controller_property": PropertyGroup("set-controlprop", CONTROLLER_PROPERTIES),
            "client_property": PropertyGroup("set-prop", CLIENT_PROPERTIES),
        },
    ),
    "evs": ResourceType(
        name="evs",
        description="Elastic Virtual Switch",
        name_convention="<tenant>/<evs>",
        name_parts=2,
        groups={"*": PropertyGroup("set-evsprop", ("maxbw", "vlanid", "vni", "uuid"))},
    ),
    "evs_ipnet": ResourceType(
        name="evs_ipnet",
        description="IPnet (IPv4 or IPv6 subnet) of an EVS",
        name_convention="<tenant>/<evs>/<ipnet>",
        name_parts=3,
        groups={"*": PropertyGroup("set-ipnetprop", ("subnet", "defrouter", "pool", "uuid"))},
        required=("subnet",),
    ),
    "evs_vport": ResourceType(
        name="evs_vport",
        description="Virtual port attached to an EVS",
        name_convention="<tenant>/<evs>/<vport>",
        name_parts=3,
        groups={"*": PropertyGroup("set-vportprop", ("maxbw", "ipaddr", "macaddr", "uuid"))},
    ),
}


def resource_type_names() -> List[str]:
    return list(RESOURCE_TYPES)
