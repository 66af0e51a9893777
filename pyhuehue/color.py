"""Conversions between CIE 1931 xy chromaticity and 8-bit RGB.

Hue lights take their color as a point in the CIE xy plane. Each light can
only reproduce the points inside the triangle formed by its red, green and
blue primaries (the gamut), so every conversion ends by restraining the
result into that triangle.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from numbers import Integral, Real
from typing import Any, Iterable, Iterator, NamedTuple

from .exceptions import (
    DegenerateGamut,
    InvalidComponent,
    InvalidRGB,
    OutOfGamut,
)

# Cross products this close to zero are treated as a point on the edge.
EDGE_TOLERANCE = 1e-12

# sRGB primaries with a D65 white point (IEC 61966-2-1).
RGB_TO_XYZ = (
    (0.4124564, 0.3575761, 0.1804375),
    (0.2126729, 0.7151522, 0.0721750),
    (0.0193339, 0.1191920, 0.9503041),
)
XYZ_TO_RGB = (
    (3.2404542, -1.5371385, -0.4985314),
    (-0.9692660, 1.8760108, 0.0415560),
    (0.0556434, -0.2040259, 1.0572252),
)


@dataclass(frozen=True)
class ColorXY:
    """A point in the CIE 1931 xy chromaticity plane."""

    x: float
    y: float

    def __post_init__(self) -> None:
        """Validate and normalize both coordinates."""
        for name in ("x", "y"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise InvalidComponent(
                    f"{name} must be a number, got {value!r}"
                )
            if not math.isfinite(value):
                raise InvalidComponent(f"{name} must be finite, got {value}")
            if value < 0:
                raise InvalidComponent(
                    f"{name} must not be negative, got {value}"
                )
            object.__setattr__(self, name, float(value))

    def __iter__(self) -> Iterator[float]:
        """Allow `x, y = color_xy`."""
        return iter((self.x, self.y))

    def squared_distance(self, other: ColorXY) -> float:
        """Return the squared euclidean distance to another point."""
        return (self.x - other.x) ** 2 + (self.y - other.y) ** 2

    @classmethod
    def from_json(cls, data: Any) -> ColorXY:
        """Initialize from a `{"x": .., "y": ..}` object."""
        try:
            return cls(data["x"], data["y"])
        except (KeyError, TypeError) as err:
            raise InvalidComponent(f"Invalid xy value: {data!r}") from err

    def to_json(self) -> dict[str, float]:
        """Return the `{"x": .., "y": ..}` object sent to the bridge."""
        return {"x": self.x, "y": self.y}


def _as_xy(value: ColorXY | Iterable[float]) -> ColorXY:
    if isinstance(value, ColorXY):
        return value
    try:
        x, y = value  # pylint: disable=invalid-name
    except (TypeError, ValueError) as err:
        raise InvalidComponent(
            f"Expected an (x, y) pair, got {value!r}"
        ) from err
    return ColorXY(x, y)


def _cross(a: ColorXY, b: ColorXY, p: ColorXY) -> float:
    """Return the z component of (b - a) x (p - a)."""
    return (b.x - a.x) * (p.y - a.y) - (b.y - a.y) * (p.x - a.x)


def is_same_side(p1: ColorXY, p2: ColorXY, a: ColorXY, b: ColorXY) -> bool:
    """Test if points p1 and p2 lie on the same side of line a-b.

    A point on the line itself is on both sides.
    """
    cross_p1 = _cross(a, b, p1)
    if abs(cross_p1) <= EDGE_TOLERANCE:
        return True
    return cross_p1 * _cross(a, b, p2) > 0


def closest_point(p: ColorXY, a: ColorXY, b: ColorXY) -> ColorXY:
    """Return the point on the segment a-b that is closest to p."""
    # pylint: disable=invalid-name
    ab_x, ab_y = b.x - a.x, b.y - a.y
    dot_ap_ab = (p.x - a.x) * ab_x + (p.y - a.y) * ab_y
    dot_ab_ab = ab_x * ab_x + ab_y * ab_y
    t = dot_ap_ab / dot_ab_ab
    if t <= 0.0:
        return a
    if t >= 1.0:
        return b
    return ColorXY(a.x + ab_x * t, a.y + ab_y * t)


@dataclass(frozen=True)
class Gamut:
    """The triangle of colors a light is able to reproduce."""

    red: ColorXY
    green: ColorXY
    blue: ColorXY

    def __post_init__(self) -> None:
        """Reject triangles without area."""
        for name in ("red", "green", "blue"):
            object.__setattr__(self, name, _as_xy(getattr(self, name)))
        # Relative to the sides at red, so small triangles are still valid.
        sides = math.hypot(
            self.green.x - self.red.x, self.green.y - self.red.y
        ) * math.hypot(self.blue.x - self.red.x, self.blue.y - self.red.y)
        if abs(_cross(self.red, self.green, self.blue)) <= (
            EDGE_TOLERANCE * sides
        ):
            raise DegenerateGamut(
                f"Gamut primaries are collinear: {self.red}, {self.green}, "
                f"{self.blue}"
            )

    def area(self) -> float:
        """Return the (unsigned) area of the triangle."""
        return abs(_cross(self.red, self.green, self.blue)) / 2

    def centroid(self) -> ColorXY:
        """Return the center of mass of the triangle."""
        return ColorXY(
            (self.red.x + self.green.x + self.blue.x) / 3,
            (self.red.y + self.green.y + self.blue.y) / 3,
        )

    def edges(self) -> tuple[tuple[ColorXY, ColorXY], ...]:
        """Return the edges in the order used to break ties in restrain."""
        return (
            (self.red, self.green),
            (self.green, self.blue),
            (self.blue, self.red),
        )

    def contains(self, xy: ColorXY | Iterable[float]) -> bool:
        """Return True if xy is inside the triangle or on its boundary."""
        xy = _as_xy(xy)
        return (
            is_same_side(xy, self.green, self.red, self.blue)
            and is_same_side(xy, self.blue, self.green, self.red)
            and is_same_side(xy, self.red, self.blue, self.green)
        )

    def restrain(self, xy: ColorXY | Iterable[float]) -> ColorXY:
        """Return the closest point within the gamut triangle for xy."""
        xy = _as_xy(xy)
        if self.contains(xy):
            return xy
        candidates = (closest_point(xy, a, b) for a, b in self.edges())
        # min() keeps the first of equally close candidates.
        return min(candidates, key=xy.squared_distance)

    def xy_from_rgb8(self, rgb: Iterable[int]) -> ColorXY:
        """Convert an RGB triple to a point inside this gamut."""
        return rgb_to_xy(rgb, self)

    def rgb8_from_xy(self, xy: ColorXY) -> RGB8:
        """Convert a point, restrained to this gamut, to an RGB triple."""
        return xy_to_rgb(xy, self)

    @classmethod
    def from_json(cls, data: Any) -> Gamut:
        """Initialize from the `gamut` object of a light resource."""
        try:
            return cls(
                ColorXY.from_json(data["red"]),
                ColorXY.from_json(data["green"]),
                ColorXY.from_json(data["blue"]),
            )
        except (KeyError, TypeError) as err:
            raise InvalidComponent(f"Invalid gamut: {data!r}") from err

    def to_json(self) -> dict[str, dict[str, float]]:
        """Return the `gamut` object of a light resource."""
        return {
            "red": self.red.to_json(),
            "green": self.green.to_json(),
            "blue": self.blue.to_json(),
        }


# Gamut classes reported by Hue lights.
GAMUT_A = Gamut(
    ColorXY(0.704, 0.296), ColorXY(0.2151, 0.7106), ColorXY(0.138, 0.08)
)
GAMUT_B = Gamut(
    ColorXY(0.675, 0.322), ColorXY(0.409, 0.518), ColorXY(0.167, 0.04)
)
GAMUT_C = Gamut(
    ColorXY(0.6915, 0.3083), ColorXY(0.17, 0.7), ColorXY(0.1532, 0.0475)
)
GAMUTS: dict[str, Gamut] = {"A": GAMUT_A, "B": GAMUT_B, "C": GAMUT_C}
DEFAULT_GAMUT = Gamut(ColorXY(1.0, 0.0), ColorXY(0.0, 1.0), ColorXY(0.0, 0.0))

# Used as the chromaticity of black, which has none.
WHITE_POINT = ColorXY(0.3127, 0.3290)


def get_gamut(gamut_type: str | None) -> Gamut:
    """Return the gamut for a gamut class, or the full triangle if unknown."""
    return GAMUTS.get((gamut_type or "").upper(), DEFAULT_GAMUT)


class RGB8(NamedTuple):
    """An sRGB color with 8 bits per channel."""

    r: int
    g: int
    b: int

    @classmethod
    def from_values(cls, red: Any, green: Any, blue: Any) -> RGB8:
        """Validate the channels and build an RGB8."""
        for name, value in (("red", red), ("green", green), ("blue", blue)):
            if (
                isinstance(value, bool)
                or not isinstance(value, Integral)
                or not 0 <= value <= 255
            ):
                raise InvalidRGB(
                    f"{name} must be an integer in [0, 255], got {value!r}"
                )
        return cls(int(red), int(green), int(blue))


def gamma_correct(value: float) -> float:
    """Linearize an sRGB encoded channel value in [0, 1]."""
    if value > 0.04045:
        return ((value + 0.055) / 1.055) ** 2.4
    return value / 12.92


def gamma_inverse(value: float) -> float:
    """Encode a linear channel value with the sRGB transfer curve."""
    if value > 0.0031308:
        return 1.055 * value ** (1 / 2.4) - 0.055
    return 12.92 * value


def _transform(
    matrix: tuple[tuple[float, float, float], ...], vector: Iterable[float]
) -> tuple[float, ...]:
    values = tuple(vector)
    return tuple(sum(m * v for m, v in zip(row, values)) for row in matrix)


def _to_channel(value: float) -> int:
    return int(max(0.0, min(value * 255.0, 255.0)))


def rgb_to_xy(rgb: Iterable[int], gamut: Gamut) -> ColorXY:
    """Convert an RGB triple into a point inside the gamut.

    Brightness is discarded; only the chromaticity is kept. Black has no
    chromaticity and is reported as the D65 white point.
    """
    linear = (gamma_correct(c / 255.0) for c in RGB8.from_values(*rgb))
    x_, y_, z_ = _transform(RGB_TO_XYZ, linear)
    total = x_ + y_ + z_
    if total <= 0.0:
        return gamut.restrain(WHITE_POINT)
    return gamut.restrain(ColorXY(x_ / total, y_ / total))


def xy_to_rgb(xy: ColorXY, gamut: Gamut) -> RGB8:
    """Convert a point into an RGB triple at full brightness.

    The point is restrained into the gamut first. Channels outside of the
    sRGB range are clamped.
    """
    xy = gamut.restrain(_as_xy(xy))
    if xy.y == 0.0:
        return RGB8(0, 0, 0)
    x_, z_ = xy.x / xy.y, (1.0 - xy.x - xy.y) / xy.y
    linear = _transform(XYZ_TO_RGB, (x_, 1.0, z_))
    return RGB8(*(_to_channel(gamma_inverse(c)) for c in linear))


def _check_gamut(gamut: Any) -> None:
    if not isinstance(gamut, Gamut):
        raise InvalidComponent(f"gamut must be a Gamut, got {gamut!r}")


@dataclass(frozen=True)
class Color:
    """A color point together with the gamut it was validated against."""

    xy: ColorXY
    gamut: Gamut
    gamut_type: str = "other"

    def __post_init__(self) -> None:
        """Refuse points outside of the gamut."""
        _check_gamut(self.gamut)
        object.__setattr__(self, "xy", _as_xy(self.xy))
        if not self.gamut.contains(self.xy):
            raise OutOfGamut(
                f"({self.xy.x}, {self.xy.y}) is outside of gamut "
                f"{self.gamut_type}"
            )

    @classmethod
    def restrained(
        cls,
        xy: ColorXY | Iterable[float],
        gamut: Gamut,
        gamut_type: str = "other",
    ) -> Color:
        """Build a Color, moving xy into the gamut first."""
        _check_gamut(gamut)
        return cls(gamut.restrain(xy), gamut, gamut_type)

    def with_xy(self, xy: ColorXY | Iterable[float]) -> Color:
        """Return a copy with a different color point."""
        return replace(self, xy=xy)

    @property
    def rgb(self) -> RGB8:
        """The color as an RGB triple at full brightness."""
        return xy_to_rgb(self.xy, self.gamut)

    @classmethod
    def from_json(cls, data: Any) -> Color:
        """Initialize from the `color` object of a light resource."""
        if not isinstance(data, dict):
            raise InvalidComponent(f"Invalid color: {data!r}")
        gamut_type = data.get("gamut_type") or "other"
        if (gamut_json := data.get("gamut")) is not None:
            gamut = Gamut.from_json(gamut_json)
        else:
            gamut = get_gamut(gamut_type)
        return cls(ColorXY.from_json(data.get("xy")), gamut, gamut_type)

    def to_json(self) -> dict[str, Any]:
        """Return the `color` object of a light resource."""
        return {
            "xy": self.xy.to_json(),
            "gamut": self.gamut.to_json(),
            "gamut_type": self.gamut_type,
        }
