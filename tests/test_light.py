"""Tests for the pyhuehue.light module."""

import pytest

from pyhuehue.color import GAMUT_C, ColorXY
from pyhuehue.exceptions import APIError, UnsupportedException
from pyhuehue.light import Light
from pyhuehue.models import LightResource


@pytest.fixture
def light(hue, session, light_data):
    session.put_json.return_value = {"errors": [], "data": []}
    return Light(hue, LightResource.from_json(light_data))


@pytest.fixture
def white_light(hue, session, light_data):
    del light_data["color"]
    del light_data["color_temperature"]
    del light_data["dimming"]
    session.put_json.return_value = {"errors": [], "data": []}
    return Light(hue, LightResource.from_json(light_data))


def test_state(light):
    assert light.name == "Desk"
    assert light.on is True
    assert light.brightness == 50.0
    assert light.color.xy == ColorXY(0.4573, 0.41)
    assert light.temperature.mirek == 366
    assert repr(light) == '<LIGHT "Desk">'


def test_switch(light, session):
    assert light.turn_off() is light
    assert light.on is False
    session.put_json.assert_called_once_with(
        f"clip/v2/resource/light/{light.id}", {"on": {"on": False}}
    )

    light.toggle()
    assert light.on is True
    assert session.put_json.call_args.args[1] == {"on": {"on": True}}


def test_switch_rejected(light, session):
    session.put_json.return_value = {"errors": [{"description": "soft off"}]}
    with pytest.raises(APIError):
        light.turn_off()
    assert light.on is True


def test_set_color(light, session):
    light.set_color(ColorXY(0.3, 0.3))

    session.put_json.assert_called_once_with(
        f"clip/v2/resource/light/{light.id}",
        {"color": {"xy": {"x": 0.3, "y": 0.3}}},
    )
    assert light.color.xy == ColorXY(0.3, 0.3)
    assert light.color.gamut == GAMUT_C


def test_set_color_restrains(light, session):
    light.set_color((0.8, 0.1))

    sent = session.put_json.call_args.args[1]["color"]["xy"]
    expected = GAMUT_C.restrain(ColorXY(0.8, 0.1))
    assert sent == expected.to_json()
    assert light.color.xy == expected


def test_set_color_rgb(light, session):
    light.set_color_rgb((255, 0, 0))

    sent = session.put_json.call_args.args[1]["color"]["xy"]
    assert (sent["x"], sent["y"]) == pytest.approx((0.64, 0.33), abs=1e-4)
    assert GAMUT_C.contains(light.color.xy)


def test_set_color_rejected(light, session):
    session.put_json.return_value = {"errors": [{"description": "busy"}]}
    with pytest.raises(APIError):
        light.set_color(ColorXY(0.3, 0.3))
    assert light.color.xy == ColorXY(0.4573, 0.41)


@pytest.mark.parametrize(
    "brightness,expected", [(75, 75.0), (120, 100.0), (-1, 0.0)]
)
def test_dim(light, session, brightness, expected):
    light.dim(brightness)
    assert light.brightness == expected
    session.put_json.assert_called_once_with(
        f"clip/v2/resource/light/{light.id}",
        {"dimming": {"brightness": expected}},
    )


def test_unsupported(white_light, session):
    with pytest.raises(UnsupportedException):
        white_light.set_color(ColorXY(0.3, 0.3))
    with pytest.raises(UnsupportedException):
        white_light.set_color_rgb((255, 255, 255))
    with pytest.raises(UnsupportedException):
        white_light.dim(10)
    session.put_json.assert_not_called()
    assert white_light.color is None
    assert white_light.brightness is None
