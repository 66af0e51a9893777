"""Representation of a device registered with a Hue bridge."""
from __future__ import annotations

from typing import TYPE_CHECKING

from .models import DeviceResource

if TYPE_CHECKING:
    from .hue import Hue


class Device:
    """A physical device; its lights, sensors etc. are its services."""

    def __init__(self, hue: Hue, resource: DeviceResource) -> None:
        """Create a Device from its resource."""
        self.hue = hue
        self.id = resource.id  # pylint: disable=invalid-name
        self.name = resource.metadata.name
        self.product = resource.product_data
        self.services = resource.services

    def __repr__(self) -> str:
        """Return a string representation of the device."""
        return f'<DEVICE "{self.name}" {self.product.model_id}>'
