"""
Symbol synthesis entry point for tacdraw.

synthesize() looks up the generator for a symbol identifier and runs it
against the base geometry. The default registry is built and frozen when
this module is imported and is read-only afterwards.
"""

import math
import numbers
from typing import List, Optional

from shapely.geometry.base import BaseGeometry

from tacdraw.errors import InvalidParameter
from tacdraw.geometry.kernel import GeometryKernel
from tacdraw.models import Primitive
from tacdraw.styles.context import StyleContext
from tacdraw.styles.registry import build_registry
from tacdraw.tracer import get_tracer, trace

_registry = build_registry()
_kernel = GeometryKernel()


def get_registry():
    """Get the process-wide style registry."""
    return _registry


def kernel_from_config(config):
    """Geometry kernel matching a SynthesisConfig."""
    return GeometryKernel(quad_segs=config.kernel.quad_segs)


@trace(label="synthesize", arg_names=["identifier", "width", "resolution"])
def synthesize(identifier, base_geometry, width, resolution, registry=None, kernel=None) -> Optional[List[Primitive]]:
    """
    Build the drawable primitives for one symbol.

    Args:
        identifier: symbol identifier, e.g. "G*T*X-----"
        base_geometry: shapely LineString or sequence of (x, y) coordinates
        width: symbol width in map units, > 0
        resolution: map units per pixel, > 0
        registry: StyleRegistry to use instead of the default one
        kernel: GeometryKernel to use instead of the default one

    Returns:
        list of Primitive models (Stroke, Fill, Label) in draw order, or None when no
        generator is registered for identifier
    """
    tracer = get_tracer()

    if registry is None:
        registry = _registry
    if kernel is None:
        kernel = _kernel

    generator = registry.lookup(identifier)
    if generator is None:
        tracer.event(f"No style registered for {identifier!r}", level="DEBUG")
        return None

    _check_positive("width", width)
    _check_positive("resolution", resolution)

    if isinstance(base_geometry, BaseGeometry):
        line = kernel.as_line(base_geometry)
    else:
        line = kernel.line_string(base_geometry)

    primitives = generator(StyleContext(kernel), line, width, resolution)

    tracer.event(f"{identifier} -> {len(primitives)} primitives", primitives=primitives)

    return primitives


def _check_positive(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameter(f"{name} must be a number, got {value!r}")
    if not (math.isfinite(value) and value > 0):
        raise InvalidParameter(f"{name} must be positive and finite, got {value!r}")
