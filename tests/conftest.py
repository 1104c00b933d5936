"""
Shared fixtures for the EVS property compiler tests.
"""

import pytest

from evs_lib.properties import get_property_spec


@pytest.fixture
def uplink_spec():
    return get_property_spec("uplink-port")


@pytest.fixture
def vxlan_addr_spec():
    return get_property_spec("vxlan-addr")


@pytest.fixture
def uri_spec():
    return get_property_spec("uri-template")


@pytest.fixture
def warnings():
    """Collects deprecation messages instead of printing them."""
    class Collector(list):
        def __call__(self, msg):
            self.append(msg)
    return Collector()
