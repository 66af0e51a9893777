"""Tests for the pyhuehue.hue module."""

import unittest.mock as mock
import uuid

import pytest

from pyhuehue import exceptions
from pyhuehue.device import Device
from pyhuehue.hue import Hue
from pyhuehue.light import Light
from pyhuehue.models import DeviceType


@pytest.fixture
def unauthorized(bridge, session):
    session.application_key = None
    return Hue(bridge, DeviceType("huehue", "test"), session=session)


class TestAuthorize:
    """Tests for registering an application key."""

    def test_authorize(self, unauthorized, session):
        session.post_json.return_value = [
            {"success": {"username": "83b7780291a6ceffbe0bd049104df"}}
        ]

        assert unauthorized.authorize() == "83b7780291a6ceffbe0bd049104df"

        session.post_json.assert_called_once_with(
            "api", {"devicetype": "huehue#test"}
        )
        assert unauthorized.application_key == (
            "83b7780291a6ceffbe0bd049104df"
        )

    def test_link_button_not_pressed(self, unauthorized, session):
        session.post_json.return_value = [
            {
                "error": {
                    "type": 101,
                    "address": "",
                    "description": "link button not pressed",
                }
            }
        ]

        with pytest.raises(exceptions.UnauthorizedException):
            unauthorized.authorize()
        assert unauthorized.application_key is None

    def test_already_authorized(self, hue, session):
        with pytest.raises(exceptions.AlreadyAuthorized):
            hue.authorize()
        session.post_json.assert_not_called()

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {},
            [{"success": {}}],
            [{"success": {"username": "a"}}, {"success": {"username": "b"}}],
            ["username"],
        ],
    )
    def test_invalid_response(self, unauthorized, session, payload):
        session.post_json.return_value = payload
        with pytest.raises(exceptions.InvalidResponseError):
            unauthorized.authorize()
        assert unauthorized.application_key is None

    @pytest.mark.parametrize(
        "method,args", [("lights", ()), ("devices", ()), ("light", ("1",))]
    )
    def test_requires_key(self, unauthorized, session, method, args):
        with pytest.raises(exceptions.NotAuthorized):
            getattr(unauthorized, method)(*args)
        session.get_json.assert_not_called()


def test_connect(config_data):
    with mock.patch("pyhuehue.hue.Session") as mock_session:
        mock_session.return_value.get_json.return_value = config_data
        hue = Hue.connect("192.168.1.100", DeviceType("huehue", "test"), "k")

    mock_session.assert_called_once_with("192.168.1.100", "k")
    mock_session.return_value.get_json.assert_called_once_with(
        "api/0/config"
    )
    assert hue.bridge.id == "001788FFFEAABBCC"
    assert hue.application_key is mock_session.return_value.application_key


def test_init_sets_key(bridge, session):
    session.application_key = None
    hue = Hue(bridge, DeviceType("huehue", "test"), "key", session=session)
    assert hue.application_key == "key"


def test_bridges(bridge):
    with mock.patch(
        "pyhuehue.hue.discover_bridges", return_value=[bridge]
    ) as mock_discover:
        assert Hue.bridges(2.0) == [bridge]
    mock_discover.assert_called_once_with(2.0)


def test_lights(hue, session, light_data):
    session.get_json.return_value = {"errors": [], "data": [light_data]}

    lights = hue.lights()

    session.get_json.assert_called_once_with("clip/v2/resource/light")
    assert len(lights) == 1
    assert isinstance(lights[0], Light)
    assert lights[0].id == uuid.UUID(light_data["id"])
    assert lights[0].hue is hue


def test_lights_error(hue, session):
    session.get_json.return_value = {
        "errors": [{"description": "unauthorized user"}],
        "data": [],
    }
    with pytest.raises(exceptions.APIError, match="unauthorized user"):
        hue.lights()


def test_light(hue, session, light_data):
    session.get_json.return_value = {"errors": [], "data": [light_data]}

    light = hue.light(light_data["id"])

    session.get_json.assert_called_once_with(
        f"clip/v2/resource/light/{light_data['id']}"
    )
    assert light.name == "Desk"


def test_light_not_returned(hue, session):
    session.get_json.return_value = {"errors": [], "data": []}
    with pytest.raises(exceptions.InvalidResponseError):
        hue.light("3f5c39fa-7b1a-4d4b-9a87-5d2a9b1d3c11")


def test_devices(hue, session, device_data):
    session.get_json.return_value = {"errors": [], "data": [device_data]}

    devices = hue.devices()

    session.get_json.assert_called_once_with("clip/v2/resource/device")
    assert isinstance(devices[0], Device)
    assert devices[0].name == "Desk"
    assert devices[0].product.product_name == "Hue color lamp"
    assert repr(devices[0]) == '<DEVICE "Desk" LCA001>'


def test_update_light(hue, session):
    session.put_json.return_value = {"errors": [], "data": []}

    hue.update_light("1", {"on": {"on": True}})

    session.put_json.assert_called_once_with(
        "clip/v2/resource/light/1", {"on": {"on": True}}
    )


def test_update_light_error(hue, session):
    session.put_json.return_value = {
        "errors": [{"description": "device (light) has communication issues"}]
    }
    with pytest.raises(exceptions.APIError):
        hue.update_light("1", {"on": {"on": True}})


def test_repr(hue):
    assert repr(hue) == (
        '<Hue "huehue#test" <HUE BRIDGE "001788FFFEAABBCC" BSB002 at '
        '192.168.1.100>>'
    )
