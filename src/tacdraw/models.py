"""
Pydantic models for drawable primitives.

Generators return ordered lists of these models. They are frozen: a
primitive never changes after a generator creates it, and its position
in the list is its only identity (later primitives draw on top).
"""

import math
from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator
from shapely.geometry import mapping
from shapely.geometry.base import BaseGeometry


class PrimitiveKind(str, Enum):
    """Discriminator for the three primitive types."""
    STROKE = "stroke"
    FILL = "fill"
    LABEL = "label"


LINEAL_TYPES = ("LineString", "LinearRing", "MultiLineString")
POLYGONAL_TYPES = ("Polygon", "MultiPolygon")


def geometry_parts(geometry):
    """Flatten collections into their simple parts."""
    if hasattr(geometry, "geoms"):
        parts = []
        for g in geometry.geoms:
            parts.extend(geometry_parts(g))
        return parts
    return [geometry]


class Stroke(BaseModel):
    """A stroked line geometry, solid or dashed."""
    kind: PrimitiveKind = PrimitiveKind.STROKE
    geometry: BaseGeometry
    dashed: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    @field_validator("geometry")
    @classmethod
    def _lineal(cls, geometry):
        bad = [p.geom_type for p in geometry_parts(geometry) if p.geom_type not in LINEAL_TYPES]
        if bad:
            raise ValueError(f"stroke geometry must be lineal, found {bad}")
        return geometry

    @field_serializer("geometry")
    def _dump_geometry(self, geometry):
        return mapping(geometry)


class Fill(BaseModel):
    """A filled region."""
    kind: PrimitiveKind = PrimitiveKind.FILL
    geometry: BaseGeometry

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    @field_validator("geometry")
    @classmethod
    def _polygonal(cls, geometry):
        bad = [p.geom_type for p in geometry_parts(geometry) if p.geom_type not in POLYGONAL_TYPES]
        if bad:
            raise ValueError(f"fill geometry must be polygonal, found {bad}")
        return geometry

    @field_serializer("geometry")
    def _dump_geometry(self, geometry):
        return mapping(geometry)


class Label(BaseModel):
    """
    A text placement.

    rotation is in radians. flip asks the renderer to turn the text by pi
    when the rotation would otherwise leave it upside down.
    """
    kind: PrimitiveKind = PrimitiveKind.LABEL
    anchor: Tuple[float, float]
    text: str
    rotation: float = 0.0
    flip: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("rotation")
    @classmethod
    def _finite(cls, rotation):
        if not math.isfinite(rotation):
            raise ValueError("label rotation must be finite")
        return rotation


Primitive = Union[Stroke, Fill, Label]


def dump_primitives(primitives: Sequence[Primitive]) -> List[Dict[str, Any]]:
    """Plain-dict form of a primitive sequence, suitable for JSON."""
    return [p.model_dump(mode="json") for p in primitives]


def upright_rotation(label):
    """
    Rotation a renderer should apply to a label, in [0, 2pi).

    Flipped labels whose rotation falls in the lower half turn are turned
    by pi so the text reads left to right.
    """
    rotation = label.rotation % (2 * math.pi)
    if label.flip and math.pi / 2 < rotation < 3 * math.pi / 2:
        rotation = (rotation - math.pi) % (2 * math.pi)
    return rotation


def compute_bounds(primitives):
    """
    Combined bounds of a primitive sequence.

    Returns [min_x, min_y, max_x, max_y]; labels contribute their anchor.
    """
    if not primitives:
        return [0.0, 0.0, 0.0, 0.0]

    bounds = []
    for p in primitives:
        if isinstance(p, Label):
            bounds.append([p.anchor[0], p.anchor[1], p.anchor[0], p.anchor[1]])
        elif not p.geometry.is_empty:
            bounds.append(list(p.geometry.bounds))

    if not bounds:
        return [0.0, 0.0, 0.0, 0.0]

    min_x = min(b[0] for b in bounds)
    min_y = min(b[1] for b in bounds)
    max_x = max(b[2] for b in bounds)
    max_y = max(b[3] for b in bounds)
    return [min_x, min_y, max_x, max_y]
