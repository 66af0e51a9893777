"""Models for the JSON documents exchanged with a Hue bridge."""
from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from .color import Color, ColorXY
from .exceptions import (
    APIError,
    ColorException,
    InvalidDeviceType,
    InvalidResponseError,
    OutOfGamut,
    UnauthorizedException,
)

APPLICATION_NAME_REGEX = re.compile(r"^\w{1,20}$")
DEVICE_NAME_REGEX = re.compile(r"^\w{1,19}$")


class ErrorCode(IntEnum):
    """Error types reported by the bridge."""

    UNKNOWN = 0
    UNAUTHORIZED = 1
    INVALID_JSON = 2
    RESOURCE_NOT_AVAILABLE = 3
    RESOURCE_METHOD_NOT_AVAILABLE = 4
    PARAMETER_MISSING = 5
    PARAMETER_NOT_AVAILABLE = 6
    PARAMETER_VALUE = 7
    PARAMETER_NOT_MODIFIABLE = 8
    TOO_MANY_ITEMS = 11
    PORTAL_CONNECTION_REQUIRED = 12
    LINK_BUTTON_NOT_PRESSED = 101
    INTERNAL_ERROR = 901

    @classmethod
    def _missing_(cls, value: object) -> ErrorCode:
        return cls.UNKNOWN


def _require(data: Any, key: str, kind: type | tuple[type, ...]) -> Any:
    """Return data[key], raising InvalidResponseError if absent or wrong."""
    if not isinstance(data, dict):
        raise InvalidResponseError(f"Expected an object, got {data!r}")
    value = data.get(key)
    valid = isinstance(value, kind)
    if isinstance(value, bool) and kind is not bool:
        valid = False  # bool is a subclass of int
    if not valid:
        raise InvalidResponseError(f"Invalid or missing {key}: {value!r}")
    return value


def _uuid(data: Any, key: str) -> uuid.UUID:
    value = _require(data, key, str)
    try:
        return uuid.UUID(value)
    except ValueError as err:
        raise InvalidResponseError(f"Invalid {key}: {value!r}") from err


def raise_for_errors(payload: Any) -> None:
    """Raise the first error object found in a bridge response.

    Handles both the v1 shape, `[{"error": {...}}]`, and the v2 shape,
    `{"errors": [{"description": ...}]}`.
    """
    if isinstance(payload, list):
        for item in payload:
            if isinstance(item, dict) and isinstance(item.get("error"), dict):
                error = item["error"]
                error_type = ErrorCode(error.get("type", 0))
                description = str(error.get("description", ""))
                if error_type in (
                    ErrorCode.UNAUTHORIZED,
                    ErrorCode.LINK_BUTTON_NOT_PRESSED,
                ):
                    raise UnauthorizedException(description)
                raise APIError(
                    description, error_type, str(error.get("address", ""))
                )
    elif isinstance(payload, dict) and (errors := payload.get("errors")):
        descriptions = (
            str(error.get("description", "")) if isinstance(error, dict)
            else str(error)
            for error in errors
        )
        raise APIError("; ".join(descriptions))


def resource_data(payload: Any) -> list[dict[str, Any]]:
    """Return the `data` list of a v2 resource response."""
    raise_for_errors(payload)
    data = _require(payload, "data", list)
    if not all(isinstance(item, dict) for item in data):
        raise InvalidResponseError(f"Invalid data items: {data!r}")
    return data


@dataclass(frozen=True)
class DeviceType:
    """The `devicetype` an application registers with, `app#device`."""

    application_name: str
    device_name: str

    def __post_init__(self) -> None:
        """Validate both names against the bridge's rules."""
        if not APPLICATION_NAME_REGEX.match(self.application_name):
            raise InvalidDeviceType(
                "Application name must be 1-20 word characters, got "
                f"{self.application_name!r}"
            )
        if not DEVICE_NAME_REGEX.match(self.device_name):
            raise InvalidDeviceType(
                "Device name must be 1-19 word characters, got "
                f"{self.device_name!r}"
            )

    @classmethod
    def from_string(cls, value: str) -> DeviceType:
        """Parse a `app#device` string."""
        application_name, sep, device_name = value.partition("#")
        if not sep:
            raise InvalidDeviceType(f"Expected 'app#device', got {value!r}")
        return cls(application_name, device_name)

    def __str__(self) -> str:
        """Return the `app#device` form."""
        return f"{self.application_name}#{self.device_name}"


@dataclass
class Config:  # pylint: disable=too-many-instance-attributes
    """Public bridge configuration, from `/api/0/config`."""

    name: str
    datastoreversion: str
    swversion: str
    apiversion: str
    mac: str
    bridgeid: str
    factorynew: bool
    replacesbridgeid: str | None
    modelid: str
    starterkitid: str | None

    @classmethod
    def from_json(cls, data: Any) -> Config:
        """Initialize from the config response."""
        if not isinstance(data, dict):
            raise InvalidResponseError(f"Invalid config: {data!r}")
        return cls(
            name=_require(data, "name", str),
            datastoreversion=_require(data, "datastoreversion", str),
            swversion=_require(data, "swversion", str),
            apiversion=_require(data, "apiversion", str),
            mac=_require(data, "mac", str),
            bridgeid=_require(data, "bridgeid", str),
            factorynew=_require(data, "factorynew", bool),
            replacesbridgeid=data.get("replacesbridgeid"),
            modelid=_require(data, "modelid", str),
            starterkitid=data.get("starterkitid") or None,
        )


@dataclass
class Metadata:
    """The `metadata` object of a resource."""

    name: str
    archetype: str = ""

    @classmethod
    def from_json(cls, data: Any) -> Metadata:
        return cls(_require(data, "name", str), data.get("archetype", ""))


@dataclass
class ProductData:
    """The `product_data` object of a device."""

    model_id: str
    manufacturer_name: str
    product_name: str
    product_archetype: str
    certified: bool
    software_version: str

    @classmethod
    def from_json(cls, data: Any) -> ProductData:
        return cls(
            model_id=_require(data, "model_id", str),
            manufacturer_name=_require(data, "manufacturer_name", str),
            product_name=_require(data, "product_name", str),
            product_archetype=_require(data, "product_archetype", str),
            certified=_require(data, "certified", bool),
            software_version=_require(data, "software_version", str),
        )


@dataclass(frozen=True)
class ResourceIdentifier:
    """Reference to another resource, `{"rid": .., "rtype": ..}`."""

    rid: uuid.UUID
    rtype: str

    @classmethod
    def from_json(cls, data: Any) -> ResourceIdentifier:
        return cls(_uuid(data, "rid"), _require(data, "rtype", str))


@dataclass
class MirekSchema:
    """Supported color temperature range, in mireds."""

    mirek_minimum: int
    mirek_maximum: int


@dataclass
class Temperature:
    """The `color_temperature` object of a light."""

    mirek: int | None
    mirek_schema: MirekSchema
    mirek_valid: bool

    @classmethod
    def from_json(cls, data: Any) -> Temperature:
        schema = _require(data, "mirek_schema", dict)
        mirek = data.get("mirek")
        if mirek is not None and not isinstance(mirek, int):
            raise InvalidResponseError(f"Invalid mirek: {mirek!r}")
        return cls(
            mirek=mirek,
            mirek_schema=MirekSchema(
                mirek_minimum=_require(schema, "mirek_minimum", int),
                mirek_maximum=_require(schema, "mirek_maximum", int),
            ),
            mirek_valid=bool(data.get("mirek_valid", mirek is not None)),
        )


@dataclass
class Dimming:
    """The `dimming` object of a light, brightness in percent."""

    brightness: float
    min_dim_level: float | None = None

    @classmethod
    def from_json(cls, data: Any) -> Dimming:
        return cls(
            float(_require(data, "brightness", (int, float))),
            data.get("min_dim_level"),
        )


@dataclass
class LightResource:  # pylint: disable=too-many-instance-attributes
    """An item of the `/clip/v2/resource/light` response."""

    id: uuid.UUID  # pylint: disable=invalid-name
    metadata: Metadata
    on: bool  # pylint: disable=invalid-name
    dimming: Dimming | None
    color: Color | None
    color_temperature: Temperature | None
    type: str = "light"

    @classmethod
    def from_json(cls, data: Any) -> LightResource:
        """Initialize from one light resource.

        A color point outside of the reported gamut is not corrected; it
        raises OutOfGamut so the anomaly is visible to the caller.
        """
        color = None
        if (color_json := data.get("color")) is not None:
            try:
                color = Color.from_json(color_json)
            except OutOfGamut:
                raise
            except ColorException as err:
                raise InvalidResponseError(
                    f"Invalid color: {color_json!r}"
                ) from err
        temperature = data.get("color_temperature")
        dimming = data.get("dimming")
        return cls(
            id=_uuid(data, "id"),
            metadata=Metadata.from_json(_require(data, "metadata", dict)),
            on=_require(_require(data, "on", dict), "on", bool),
            dimming=Dimming.from_json(dimming) if dimming else None,
            color=color,
            color_temperature=(
                Temperature.from_json(temperature) if temperature else None
            ),
            type=data.get("type", "light"),
        )


@dataclass
class DeviceResource:
    """An item of the `/clip/v2/resource/device` response."""

    id: uuid.UUID  # pylint: disable=invalid-name
    metadata: Metadata
    product_data: ProductData
    services: frozenset[ResourceIdentifier]
    type: str = "device"

    @classmethod
    def from_json(cls, data: Any) -> DeviceResource:
        return cls(
            id=_uuid(data, "id"),
            metadata=Metadata.from_json(_require(data, "metadata", dict)),
            product_data=ProductData.from_json(
                _require(data, "product_data", dict)
            ),
            services=frozenset(
                ResourceIdentifier.from_json(service)
                for service in _require(data, "services", list)
            ),
            type=data.get("type", "device"),
        )


def create_user_request(device_type: DeviceType) -> dict[str, Any]:
    """Body of the authorization request."""
    return {"devicetype": str(device_type)}


def light_on_request(on: bool) -> dict[str, Any]:
    # pylint: disable=invalid-name
    return {"on": {"on": bool(on)}}


def light_color_request(xy: ColorXY) -> dict[str, Any]:
    # pylint: disable=invalid-name
    return {"color": {"xy": xy.to_json()}}


def light_dimming_request(brightness: float) -> dict[str, Any]:
    """Body of a dimming request, brightness clamped to [0, 100]."""
    return {"dimming": {"brightness": max(0.0, min(float(brightness), 100.0))}}
