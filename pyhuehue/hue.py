"""Client for the resources of an authorized Hue bridge."""
from __future__ import annotations

import logging
import uuid
from typing import Any

from .bridge import Bridge
from .device import Device
from .discovery import discover_bridges
from .exceptions import AlreadyAuthorized, InvalidResponseError, NotAuthorized
from .light import Light
from .models import (
    DeviceResource,
    DeviceType,
    LightResource,
    create_user_request,
    raise_for_errors,
    resource_data,
)
from .session import Session

LOG = logging.getLogger(__name__)

LIGHT_PATH = "clip/v2/resource/light"
DEVICE_PATH = "clip/v2/resource/device"


class Hue:
    """An application registered, or about to register, with a bridge.

    Before `authorize` succeeds the round link button on the bridge must
    have been pressed. The returned application key should be stored and
    passed back in later sessions so authorization happens only once.
    """

    def __init__(
        self,
        bridge: Bridge,
        device_type: DeviceType,
        application_key: str | None = None,
        session: Session | None = None,
    ) -> None:
        """Create a client for bridge."""
        self.bridge = bridge
        self.device_type = device_type
        self._session = session or Session(bridge.address)
        if application_key is not None:
            self._session.application_key = application_key

    @classmethod
    def connect(
        cls,
        address: str,
        device_type: DeviceType,
        application_key: str | None = None,
    ) -> Hue:
        """Read the bridge configuration at address and create a client."""
        session = Session(address, application_key)
        bridge = Bridge.from_address(address, session)
        return cls(bridge, device_type, session=session)

    @staticmethod
    def bridges(timeout: float = 5.0) -> list[Bridge]:
        """Discover the bridges on the local network."""
        return discover_bridges(timeout)

    @property
    def application_key(self) -> str | None:
        """Key identifying this application to the bridge."""
        return self._session.application_key

    def authorize(self) -> str:
        """Register the application with the bridge.

        Raises:
            AlreadyAuthorized: when an application key is already set.
            UnauthorizedException: when the link button was not pressed.
        """
        if self.application_key:
            raise AlreadyAuthorized(
                f"{self.device_type} already holds an application key"
            )

        payload = self._session.post_json(
            "api", create_user_request(self.device_type)
        )
        raise_for_errors(payload)
        if not (isinstance(payload, list) and len(payload) == 1):
            raise InvalidResponseError(
                f"Unexpected authorization response: {payload!r}"
            )
        try:
            username = payload[0]["success"]["username"]
        except (KeyError, TypeError) as err:
            raise InvalidResponseError(
                f"Unexpected authorization response: {payload!r}"
            ) from err

        self._session.application_key = str(username)
        LOG.info(
            "Authorized %s with bridge %s", self.device_type, self.bridge.id
        )
        return self._session.application_key

    def _check_authorization(self) -> None:
        if not self.application_key:
            raise NotAuthorized(
                "An application key is required, call authorize() first"
            )

    def lights(self) -> list[Light]:
        """Return all lights known to the bridge."""
        self._check_authorization()
        data = resource_data(self._session.get_json(LIGHT_PATH))
        return [Light(self, LightResource.from_json(item)) for item in data]

    def light(self, light_id: uuid.UUID | str) -> Light:
        """Return a single light."""
        self._check_authorization()
        payload = self._session.get_json(f"{LIGHT_PATH}/{light_id}")
        if not (data := resource_data(payload)):
            raise InvalidResponseError(f"Light {light_id} not returned")
        return Light(self, LightResource.from_json(data[0]))

    def devices(self) -> list[Device]:
        """Return all devices known to the bridge."""
        self._check_authorization()
        data = resource_data(self._session.get_json(DEVICE_PATH))
        return [Device(self, DeviceResource.from_json(item)) for item in data]

    def update_light(self, light_id: uuid.UUID | str, body: Any) -> None:
        """Send a state change for a light and check the bridge accepted it."""
        self._check_authorization()
        raise_for_errors(
            self._session.put_json(f"{LIGHT_PATH}/{light_id}", body)
        )

    def __repr__(self) -> str:
        """Return a string representation of the client."""
        return f'<Hue "{self.device_type}" {self.bridge!r}>'
