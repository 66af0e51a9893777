"""Shared pytest fixtures."""

import os
import uuid
from unittest import mock

import pytest
from hypothesis import settings

from pyhuehue.bridge import Bridge, BridgeModel
from pyhuehue.hue import Hue
from pyhuehue.models import DeviceType
from pyhuehue.session import Session

settings.register_profile(
    "ci", max_examples=1000, deadline=1000.0  # Milliseconds
)
settings.load_profile("ci" if os.getenv("CI") else "default")

BRIDGE_ADDRESS = "192.168.1.100"
LIGHT_ID = uuid.UUID("3f5c39fa-7b1a-4d4b-9a87-5d2a9b1d3c11")
DEVICE_ID = uuid.UUID("9e5a8cd1-46fb-4b11-a1a4-58f2d2cbd0f0")


@pytest.fixture
def config_data():
    """Public bridge configuration, as returned by /api/0/config."""
    return {
        "name": "Hue Bridge",
        "datastoreversion": "131",
        "swversion": "1962097030",
        "apiversion": "1.56.0",
        "mac": "00:17:88:aa:bb:cc",
        "bridgeid": "001788FFFEAABBCC",
        "factorynew": False,
        "replacesbridgeid": None,
        "modelid": "BSB002",
        "starterkitid": "",
    }


@pytest.fixture
def light_data():
    """A gamut C color light, as returned by /clip/v2/resource/light."""
    return {
        "id": str(LIGHT_ID),
        "type": "light",
        "metadata": {"name": "Desk", "archetype": "sultan_bulb"},
        "on": {"on": True},
        "dimming": {"brightness": 50.0, "min_dim_level": 0.2},
        "color": {
            "xy": {"x": 0.4573, "y": 0.41},
            "gamut": {
                "red": {"x": 0.6915, "y": 0.3083},
                "green": {"x": 0.17, "y": 0.7},
                "blue": {"x": 0.1532, "y": 0.0475},
            },
            "gamut_type": "C",
        },
        "color_temperature": {
            "mirek": 366,
            "mirek_valid": True,
            "mirek_schema": {"mirek_minimum": 153, "mirek_maximum": 500},
        },
    }


@pytest.fixture
def device_data():
    """A device, as returned by /clip/v2/resource/device."""
    return {
        "id": str(DEVICE_ID),
        "type": "device",
        "metadata": {"name": "Desk", "archetype": "sultan_bulb"},
        "product_data": {
            "model_id": "LCA001",
            "manufacturer_name": "Signify Netherlands B.V.",
            "product_name": "Hue color lamp",
            "product_archetype": "sultan_bulb",
            "certified": True,
            "software_version": "1.93.11",
        },
        "services": [
            {"rid": str(LIGHT_ID), "rtype": "light"},
            {"rid": "c2a5d3e0-1b6f-4ad5-8a53-1f1f6b4b8e01", "rtype": "zigbee"},
        ],
    }


@pytest.fixture
def bridge():
    return Bridge(
        id="001788FFFEAABBCC",
        model=BridgeModel.BSB002,
        version="1962097030",
        address=BRIDGE_ADDRESS,
        supported=True,
    )


@pytest.fixture
def session():
    mock_session = mock.create_autospec(Session, instance=True)
    mock_session.application_key = "application-key"
    return mock_session


@pytest.fixture
def hue(bridge, session):
    return Hue(bridge, DeviceType("huehue", "test"), session=session)
