"""Lightweight Python module to discover and control Philips Hue lights."""
# flake8: noqa F401

from .bridge import Bridge, BridgeModel
from .color import (
    GAMUT_A,
    GAMUT_B,
    GAMUT_C,
    RGB8,
    Color,
    ColorXY,
    Gamut,
    get_gamut,
    rgb_to_xy,
    xy_to_rgb,
)
from .device import Device
from .discovery import discover_addresses, discover_bridges
from .exceptions import PyHueException
from .hue import Hue
from .light import Light
from .models import DeviceType
