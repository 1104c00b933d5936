"""
Unit tests for evs_lib.properties.normalize

String and mapping inputs must produce the same canonical mapping.
"""

import pytest

from evs_lib.properties import UNSET, FormatError, get_property_spec, normalize, split_uri_template


def test_uplink_port_legacy_string(uplink_spec, warnings):
    """The five positional fields map to named fields in schema order"""
    mapping = normalize("net0;10-20;100-200;foo;yes", uplink_spec, warnings)
    assert mapping == {
        "uplink-port": "net0",
        "vlan-range": "10-20",
        "vxlan-range": "100-200",
        "host": "foo",
        "flat": "yes",
    }
    assert list(mapping) == uplink_spec.field_names


def test_legacy_string_emits_deprecation_warning(uplink_spec, warnings):
    """Using the ';' format is reported but does not fail"""
    normalize("net0;;;;", uplink_spec, warnings)
    assert len(warnings) == 1
    assert "deprecated" in warnings[0]


def test_legacy_warning_goes_to_log_by_default(uplink_spec, capsys):
    """The default deprecation channel prints a warning line on stderr"""
    normalize("net0;;;;", uplink_spec)
    captured = capsys.readouterr()
    assert "[!]" in captured.err
    assert "DEPRECATED" in captured.err
    assert captured.out == ""


def test_empty_positions_are_absent(uplink_spec, warnings):
    """Empty positions are missing keys, not UNSET"""
    mapping = normalize("net0;;100-200;;", uplink_spec, warnings)
    assert mapping == {"uplink-port": "net0", "vxlan-range": "100-200"}


def test_simple_format_is_primary_field(uplink_spec, warnings):
    """A string without ';' is the primary field alone and is not deprecated"""
    assert normalize("net0", uplink_spec, warnings) == {"uplink-port": "net0"}
    assert warnings == []


@pytest.mark.parametrize("value", [
    "net0;10-20",
    "net0;10-20;100-200;foo",
    "net0;10-20;100-200;foo;yes;extra",
])
def test_uplink_port_requires_five_positions(uplink_spec, warnings, value):
    """uplink-port legacy strings must have exactly five positions"""
    with pytest.raises(FormatError):
        normalize(value, uplink_spec, warnings)


def test_vxlan_addr_legacy_string(vxlan_addr_spec, warnings):
    """vxlan-addr takes up to three positions"""
    assert normalize("10.0.0.1;0-100;node1", vxlan_addr_spec, warnings) == {
        "vxlan-addr": "10.0.0.1", "vxlan-range": "0-100", "host": "node1",
    }
    assert normalize("10.0.0.1;;node1", vxlan_addr_spec, warnings) == {
        "vxlan-addr": "10.0.0.1", "host": "node1",
    }
    with pytest.raises(FormatError):
        normalize("10.0.0.1;0-100;node1;extra", vxlan_addr_spec, warnings)


def test_legacy_string_surrounding_whitespace(vxlan_addr_spec, warnings):
    """A trailing newline does not end up in the last position"""
    assert normalize("10.0.0.1;0-100;node1\n", vxlan_addr_spec, warnings) == {
        "vxlan-addr": "10.0.0.1", "vxlan-range": "0-100", "host": "node1",
    }
    assert normalize(" 10.0.0.2 ", vxlan_addr_spec, warnings) == {"vxlan-addr": "10.0.0.2"}


def test_mapping_is_reordered_by_schema(uplink_spec, warnings):
    """Mapping keys come out in schema order"""
    mapping = normalize({"flat": "no", "host": "foo", "uplink-port": "net0"}, uplink_spec, warnings)
    assert list(mapping) == ["uplink-port", "host", "flat"]
    assert warnings == []


def test_unknown_mapping_key(uplink_spec):
    """Keys outside the property vocabulary are a FormatError"""
    with pytest.raises(FormatError) as exc:
        normalize({"uplink-port": "net0", "bogus-field": "x"}, uplink_spec)
    assert exc.value.field == "bogus-field"


def test_unset_is_preserved(uplink_spec):
    """UNSET values stay in the mapping"""
    mapping = normalize({"uplink-port": "net0", "flat": UNSET}, uplink_spec)
    assert mapping["flat"] is UNSET


def test_unset_whole_value():
    """An UNSET value resets the primary field"""
    spec = get_property_spec("vlan-range")
    assert normalize(UNSET, spec) == {"vlan-range": UNSET}


def test_integer_values_become_strings():
    """Integers from parsed manifests are accepted as strings"""
    spec = get_property_spec("vlanid")
    assert normalize(100, spec) == {"vlanid": "100"}


@pytest.mark.parametrize("value", [["net0"], None, True, 1.5])
def test_unsupported_input_types(uplink_spec, value):
    """Only strings, mappings and UNSET are accepted"""
    with pytest.raises(FormatError):
        normalize(value, uplink_spec)


def test_host_cannot_be_unset(uplink_spec):
    """There is no default to reset a host to"""
    with pytest.raises(FormatError):
        normalize({"uplink-port": "net0", "host": UNSET}, uplink_spec)


def test_empty_host_is_absent(uplink_spec):
    """An empty host is dropped like an empty legacy position"""
    assert normalize({"uplink-port": "net0", "host": ""}, uplink_spec) == {"uplink-port": "net0"}


# ============================================================================
# uri-template
# ============================================================================

@pytest.mark.parametrize("value,expected", [
    ("ssh://", ("ssh://", None, False)),
    ("unix://node1", ("unix://", "node1", False)),
    ("ssh://;node1", ("ssh://", "node1", True)),
    ("ssh://;", ("ssh://", None, True)),
    ("bogus", ("bogus", None, False)),
])
def test_split_uri_template(value, expected):
    """Templates split into scheme and optional host"""
    assert split_uri_template(value) == expected


def test_uri_template_string(uri_spec, warnings):
    """A host suffix moves into the host field"""
    assert normalize("ssh://node1", uri_spec, warnings) == {"uri-template": "ssh://", "host": "node1"}
    assert warnings == []


def test_uri_template_semicolon_is_deprecated(uri_spec, warnings):
    """The ';' separated host suffix is reported"""
    assert normalize("ssh://;node1", uri_spec, warnings) == {"uri-template": "ssh://", "host": "node1"}
    assert len(warnings) == 1


def test_uri_template_mapping_host_wins(uri_spec, warnings):
    """A host key in the mapping overrides a host embedded in the template"""
    mapping = normalize({"uri-template": "ssh://;other", "host": "node1"}, uri_spec, warnings)
    assert mapping == {"uri-template": "ssh://", "host": "node1"}


def test_uri_template_mapping_empty_host(uri_spec, warnings):
    """An empty host key does not discard the host embedded in the template"""
    mapping = normalize({"uri-template": "ssh://node1", "host": ""}, uri_spec, warnings)
    assert mapping == {"uri-template": "ssh://", "host": "node1"}


def test_uri_template_mapping_semicolon_is_deprecated(uri_spec, warnings):
    """The ';' host separator is reported inside a mapping too"""
    mapping = normalize({"uri-template": "ssh://;node1"}, uri_spec, warnings)
    assert mapping == {"uri-template": "ssh://", "host": "node1"}
    assert len(warnings) == 1
