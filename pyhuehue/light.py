"""Representation of a light connected to a Hue bridge."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from .color import Color, ColorXY
from .exceptions import UnsupportedException
from .models import (
    LightResource,
    Temperature,
    light_color_request,
    light_dimming_request,
    light_on_request,
)

if TYPE_CHECKING:
    from .hue import Hue

LOG = logging.getLogger(__name__)


class Light:  # pylint: disable=too-many-instance-attributes
    """A light and its last known state.

    State attributes are only replaced once the bridge has accepted the
    corresponding write.
    """

    def __init__(self, hue: Hue, resource: LightResource) -> None:
        """Create a Light from its resource."""
        self.hue = hue
        self.id = resource.id  # pylint: disable=invalid-name
        self.name: str = resource.metadata.name
        self.on: bool = resource.on  # pylint: disable=invalid-name
        self.brightness: float | None = (
            resource.dimming.brightness if resource.dimming else None
        )
        self.color: Color | None = resource.color
        self.temperature: Temperature | None = resource.color_temperature

    def switch(self, on: bool) -> Light:
        """Turn the light on or off."""
        # pylint: disable=invalid-name
        self.hue.update_light(self.id, light_on_request(on))
        self.on = bool(on)
        return self

    def turn_on(self) -> Light:
        """Turn on the light."""
        return self.switch(True)

    def turn_off(self) -> Light:
        """Turn off the light."""
        return self.switch(False)

    def toggle(self) -> Light:
        """Toggle the light from on to off or off to on."""
        return self.switch(not self.on)

    def _require_color(self) -> Color:
        if self.color is None:
            raise UnsupportedException(f"{self.name} does not support color")
        return self.color

    def set_color(self, colorxy: ColorXY | Iterable[float]) -> Light:
        """Set the color of the light, limited to what it can reproduce."""
        color = self._require_color()
        if not isinstance(colorxy, ColorXY):
            colorxy = ColorXY(*colorxy)
        restrained = color.gamut.restrain(colorxy)
        if restrained != colorxy:
            LOG.debug(
                "Color %s is outside of gamut %s for %s, using %s",
                colorxy,
                color.gamut_type,
                self.name,
                restrained,
            )
        self.hue.update_light(self.id, light_color_request(restrained))
        self.color = color.with_xy(restrained)
        return self

    def set_color_rgb(self, rgb: Iterable[int]) -> Light:
        """Set the color of the light from an RGB triple."""
        color = self._require_color()
        return self.set_color(color.gamut.xy_from_rgb8(rgb))

    def dim(self, brightness: float) -> Light:
        """Set the brightness, in percent."""
        if self.brightness is None:
            raise UnsupportedException(f"{self.name} does not support dimming")
        request = light_dimming_request(brightness)
        self.hue.update_light(self.id, request)
        self.brightness = request["dimming"]["brightness"]
        return self

    @property
    def device_type(self) -> str:
        """Return what kind of resource this is."""
        return type(self).__name__

    def __repr__(self) -> str:
        """Return a string representation of the light."""
        return f'<{self.device_type.upper()} "{self.name}">'
