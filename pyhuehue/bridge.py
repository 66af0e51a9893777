"""Representation of a Hue bridge found on the network."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .models import Config
from .session import Session

# First firmware release that serves the v2 (CLIP) API.
VERSION_MIN = "1948086000"


class BridgeModel(Enum):
    """Hardware generations of the bridge."""

    BSB001 = "BSB001"
    BSB002 = "BSB002"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> BridgeModel:
        return cls.UNKNOWN


@dataclass(frozen=True)
class Bridge:
    """Identity and capabilities of a bridge at an address."""

    id: str  # pylint: disable=invalid-name
    model: BridgeModel
    version: str
    address: str
    supported: bool

    @classmethod
    def from_config(cls, address: str, config: Config) -> Bridge:
        """Build from the public configuration of the bridge."""
        return cls(
            id=config.bridgeid,
            model=BridgeModel(config.modelid),
            version=config.swversion,
            address=address,
            supported=config.swversion >= VERSION_MIN,
        )

    @classmethod
    def from_address(
        cls, address: str, session: Session | None = None
    ) -> Bridge:
        """Fetch the configuration of the bridge at address."""
        session = session or Session(address)
        config = Config.from_json(session.get_json("api/0/config"))
        return cls.from_config(address, config)

    def url(self, path: str) -> str:
        """Build an absolute URL on this bridge."""
        return f"https://{self.address}/{path.lstrip('/')}"

    def __repr__(self) -> str:
        """Return a string representation of the bridge."""
        return f'<HUE BRIDGE "{self.id}" {self.model.value} at {self.address}>'
