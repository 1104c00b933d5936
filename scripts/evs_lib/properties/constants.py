"""
Constants for the EVS property compiler.

ID bounds, input delimiters and the location of the property table.
"""

from pathlib import Path


# Inclusive ID bounds
VLAN_ID_RANGE = (1, 4094)
VXLAN_ID_RANGE = (0, 16777215)

# Deprecated positional string format: '<port>;<vlan-range>;...'
LEGACY_DELIMITER = ";"

# Compiled argument layout: -h <host> -p key=value,key=value
HOST_FLAG = "-h"
PROPERTY_FLAG = "-p"
FIELD_SEPARATOR = ","
VALUE_SEPARATOR = "="

# Field that moves to the -h flag instead of the -p list
HOST_FIELD = "host"

DEFINITIONS_FILE = Path(__file__).parent / "definitions.yaml"
