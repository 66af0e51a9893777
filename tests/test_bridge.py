"""Tests for the pyhuehue.bridge module."""

import unittest.mock as mock

import pytest

from pyhuehue.bridge import Bridge, BridgeModel
from pyhuehue.exceptions import InvalidResponseError
from pyhuehue.models import Config
from pyhuehue.session import Session


def test_from_config(config_data):
    bridge = Bridge.from_config("192.168.1.100", Config.from_json(config_data))
    assert bridge.id == "001788FFFEAABBCC"
    assert bridge.model is BridgeModel.BSB002
    assert bridge.version == "1962097030"
    assert bridge.address == "192.168.1.100"
    assert bridge.supported is True


@pytest.mark.parametrize(
    "swversion,supported",
    [("1948086000", True), ("1948085999", False), ("1935144040", False)],
)
def test_supported(config_data, swversion, supported):
    config_data["swversion"] = swversion
    bridge = Bridge.from_config("192.168.1.100", Config.from_json(config_data))
    assert bridge.supported is supported


@pytest.mark.parametrize(
    "modelid,model",
    [
        ("BSB001", BridgeModel.BSB001),
        ("BSB002", BridgeModel.BSB002),
        ("929000226503", BridgeModel.UNKNOWN),
    ],
)
def test_model(modelid, model):
    assert BridgeModel(modelid) is model


def test_from_address(config_data):
    session = mock.create_autospec(Session, instance=True)
    session.get_json.return_value = config_data

    bridge = Bridge.from_address("192.168.1.100", session)

    session.get_json.assert_called_once_with("api/0/config")
    assert bridge.id == "001788FFFEAABBCC"


def test_from_address_invalid_config():
    session = mock.create_autospec(Session, instance=True)
    session.get_json.return_value = {"name": "router"}

    with pytest.raises(InvalidResponseError):
        Bridge.from_address("192.168.1.1", session)


def test_url_and_repr(bridge):
    assert bridge.url("/api/0/config") == "https://192.168.1.100/api/0/config"
    assert repr(bridge) == (
        '<HUE BRIDGE "001788FFFEAABBCC" BSB002 at 192.168.1.100>'
    )
