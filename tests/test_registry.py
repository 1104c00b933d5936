"""
Unit tests for evs_lib.properties.registry

The property table and its validation.
"""

import pytest

from evs_lib.properties import (
    FieldKind,
    LegacyFormat,
    PropertyDefinitionError,
    compile_property,
    get_property_spec,
    get_property_specs,
    list_properties,
    load_property_specs,
    parse_property_table,
    validate_property_definition,
)


def test_builtin_properties_present():
    """Every known compiled property has a table entry"""
    names = list_properties()
    for name in ("uplink-port", "vxlan-addr", "uri-template", "vlan-range", "vxlan-range",
                 "subnet", "pool", "defrouter", "macaddr", "uuid", "ipaddr"):
        assert name in names


def test_uplink_port_schema(uplink_spec):
    """uplink-port fields, order and legacy format"""
    assert uplink_spec.field_names == ["uplink-port", "vlan-range", "vxlan-range", "host", "flat"]
    assert uplink_spec.primary_field == "uplink-port"
    assert uplink_spec.required_fields == ["uplink-port"]
    assert uplink_spec.legacy_format == LegacyFormat.POSITIONAL
    assert uplink_spec.legacy_strict is True
    assert uplink_spec.get_field("vlan-range").kind == FieldKind.VLAN_RANGE_LIST
    assert uplink_spec.get_field("bogus") is None


def test_registry_specs_cannot_be_mutated(uplink_spec):
    """Cached specs hand out their fields as a tuple"""
    assert isinstance(uplink_spec.fields, tuple)
    with pytest.raises(AttributeError):
        uplink_spec.fields.append(uplink_spec.fields[0])
    assert get_property_spec("uplink-port").field_names == [
        "uplink-port", "vlan-range", "vxlan-range", "host", "flat"]


def test_vxlan_addr_schema(vxlan_addr_spec):
    """vxlan-addr fields and multiplicity"""
    assert vxlan_addr_spec.field_names == ["vxlan-addr", "vxlan-range", "host"]
    assert vxlan_addr_spec.multiple is True
    assert vxlan_addr_spec.legacy_strict is False


def test_table_is_read_only():
    """The shared table cannot be modified by callers"""
    with pytest.raises(TypeError):
        get_property_specs()["bogus"] = None


def test_lookup_accepts_underscores():
    """Resource attribute names use underscores"""
    assert get_property_spec("uplink_port") is get_property_spec("uplink-port")


def test_validate_property_definition():
    """Table rows are checked like module definitions"""
    assert validate_property_definition({
        "name": "speed", "fields": [{"name": "speed", "kind": "bandwidth"}],
    }) == []
    errors = validate_property_definition({
        "name": "Speed", "legacy_format": "csv",
        "fields": [{"name": "speed", "kind": "fast"}, {"name": "speed", "kind": "bandwidth"}],
    })
    assert any("Invalid property name" in e for e in errors)
    assert any("invalid kind 'fast'" in e for e in errors)
    assert any("duplicate field name" in e for e in errors)
    assert any("primary field 'Speed'" in e for e in errors)
    assert any("invalid legacy_format" in e for e in errors)
    assert validate_property_definition({"fields": []}) == ["Missing required field: name"]


def test_uri_format_needs_host_field():
    """The uri legacy format splits off a host, so a host field must exist"""
    errors = validate_property_definition({
        "name": "tmpl", "legacy_format": "uri", "fields": [{"name": "tmpl", "kind": "uri_template"}],
    })
    assert errors == ["tmpl: legacy_format 'uri' requires a 'host' field"]


def test_parse_property_table_rejects_duplicates():
    """Property names are unique"""
    row = {"name": "maxbw", "fields": [{"name": "maxbw", "kind": "bandwidth"}]}
    with pytest.raises(PropertyDefinitionError):
        parse_property_table({"properties": [row, row]})
    with pytest.raises(PropertyDefinitionError):
        parse_property_table({"props": []})


def test_new_property_is_one_table_row(tmp_path):
    """Adding a property needs only a new row"""
    path = tmp_path / "definitions.yaml"
    path.write_text(
        "properties:\n"
        "  - name: mgmt-addr\n"
        "    legacy_format: positional\n"
        "    fields:\n"
        "      - name: mgmt-addr\n"
        "        kind: ip_address\n"
        "        required: true\n"
        "      - name: host\n"
        "        kind: hostname\n"
    )
    specs = load_property_specs(path)
    args = compile_property(specs["mgmt-addr"], {"mgmt-addr": "10.0.0.5", "host": "node1"})
    assert args == ["-h", "node1", "-p", "mgmt-addr=10.0.0.5"]
