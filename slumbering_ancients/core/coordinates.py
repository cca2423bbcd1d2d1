"""
Coordinate conversion between map spaces.

Three coordinate spaces are in use:

- **Geographic**: latitude/longitude as displayed by the world map viewer. The
  viewer projects the map image onto bounds ``[[-85, -180], [85, 180]]`` but
  the conversion uses the full ``[-90, 90] x [-180, 180]`` range.
- **Percent**: ``x``/``y`` in ``[0, 100]`` measured from the top-left corner of
  the world map image. World map locations are stored this way.
- **Normalized**: ``x``/``y`` in ``[0, 1]`` from the top-left corner of an
  uploaded map image. Pins, distance points and analysed areas use it.

All functions are pure.
"""

import math
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

Number = Union[int, float]
PointLike = Union[Mapping[str, Number], Sequence[Number]]

LAT_PER_PERCENT = 1.8
LNG_PER_PERCENT = 3.6

BOUNDING_BOX_KEYS = ("x1", "y1", "x2", "y2")


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def latlng_to_percent(lat: float, lng: float) -> Tuple[float, float]:
    """
    Convert a geographic position into map percentages.

    Positions beyond the map edge are clamped onto it.

    Returns:
        ``(x, y)`` with both values in ``[0, 100]``.
    """
    x = lng / LNG_PER_PERCENT + 50
    y = 50 - lat / LAT_PER_PERCENT
    return clamp(x, 0.0, 100.0), clamp(y, 0.0, 100.0)


def percent_to_latlng(x: float, y: float) -> Tuple[float, float]:
    """
    Convert map percentages into a geographic position.

    Returns:
        ``(lat, lng)``.
    """
    lat = (50 - y) * LAT_PER_PERCENT
    lng = (x - 50) * LNG_PER_PERCENT
    return lat, lng


def _check_dimensions(width: Number, height: Number) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Map dimensions must be positive, got {width}x{height}")


def normalized_to_pixels(x: float, y: float, width: Number, height: Number) -> Tuple[float, float]:
    """Scale a normalized point to pixel coordinates of a ``width`` x ``height`` image."""
    _check_dimensions(width, height)
    return x * width, y * height


def pixels_to_normalized(px: float, py: float, width: Number, height: Number) -> Tuple[float, float]:
    """Convert pixel coordinates to a normalized point, clamped to the image."""
    _check_dimensions(width, height)
    return clamp(px / width, 0.0, 1.0), clamp(py / height, 0.0, 1.0)


def _xy(point: PointLike) -> Tuple[float, float]:
    if isinstance(point, Mapping):
        return float(point["x"]), float(point["y"])
    x, y = point
    return float(x), float(y)


def path_distance(
    points: Iterable[PointLike],
    width: Number,
    height: Number,
    scale_factor: Optional[float] = None,
) -> float:
    """
    Total length of a polyline drawn on an image map.

    Each point is normalized; segment lengths are measured in pixels and
    multiplied by ``scale_factor`` (map units per pixel, 1 when unset).
    """
    _check_dimensions(width, height)
    pixel_points = [normalized_to_pixels(*_xy(p), width, height) for p in points]
    total = 0.0
    for (x1, y1), (x2, y2) in zip(pixel_points, pixel_points[1:]):
        total += math.hypot(x2 - x1, y2 - y1)
    return total * (scale_factor if scale_factor else 1.0)


def is_valid_bounding_box(bbox: object) -> bool:
    """Whether ``bbox`` is a normalized, non-degenerate ``{x1, y1, x2, y2}`` box."""
    if not isinstance(bbox, Mapping):
        return False
    values = [bbox.get(key) for key in BOUNDING_BOX_KEYS]
    # bool is an int subclass but never a coordinate
    if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in values):
        return False
    if not all(0 <= v <= 1 for v in values):
        return False
    x1, y1, x2, y2 = values
    return x2 > x1 and y2 > y1


def bounding_box_to_polygon(bbox: Mapping[str, Number]) -> List[dict]:
    """Corners of a bounding box, clockwise from the top-left."""
    x1, y1, x2, y2 = (float(bbox[key]) for key in BOUNDING_BOX_KEYS)
    return [
        {"x": x1, "y": y1},
        {"x": x2, "y": y1},
        {"x": x2, "y": y2},
        {"x": x1, "y": y2},
    ]
