"""
SVG preview export for tacdraw.

Draws a primitive sequence into an svgwrite Drawing so generator output
can be inspected by eye. Map coordinates have y pointing up; the preview
flips them into screen space and fits the drawing to the primitives'
bounds plus a margin.
"""

import math

import svgwrite

from tacdraw.models import Fill, Label, Stroke, compute_bounds, geometry_parts, upright_rotation
from tacdraw.tracer import get_tracer, trace


class ScreenTransform:
    """Maps map coordinates into the preview's pixel space."""

    def __init__(self, bounds, scale=1.0, margin=10.0):
        self.min_x, self.min_y, self.max_x, self.max_y = bounds
        self.scale = scale
        self.margin = margin

    @property
    def width(self):
        return (self.max_x - self.min_x) * self.scale + 2 * self.margin

    @property
    def height(self):
        return (self.max_y - self.min_y) * self.scale + 2 * self.margin

    def __call__(self, coord):
        return (
            (coord[0] - self.min_x) * self.scale + self.margin,
            (self.max_y - coord[1]) * self.scale + self.margin,
        )


@trace(label="render_preview")
def render_preview(primitives, config, title=None):
    """
    Create an SVG document showing a primitive sequence.

    Args:
        primitives: list of Stroke/Fill/Label models in draw order
        config: SynthesisConfig (uses config.preview)
        title: optional text for the document's <title>

    Returns:
        svgwrite.Drawing object
    """
    tracer = get_tracer()
    preview = config.preview

    for primitive in primitives:
        if not isinstance(primitive, (Stroke, Fill, Label)):
            raise TypeError(f"cannot preview {type(primitive).__name__}")

    to_screen = ScreenTransform(compute_bounds(primitives), preview.scale, preview.margin)

    dwg = svgwrite.Drawing(size=(f"{to_screen.width:.2f}px", f"{to_screen.height:.2f}px"))
    dwg.viewbox(0, 0, to_screen.width, to_screen.height)
    if title:
        dwg.set_desc(title=title)

    dwg.defs.add(dwg.style(f"""
        .stroke {{ stroke-linecap: round; stroke-linejoin: round; }}
        .label-text {{ font-family: {preview.font_family}; }}
    """))

    symbol_group = dwg.g(id="symbol")

    for index, primitive in enumerate(primitives):
        if isinstance(primitive, Stroke):
            element = _stroke_group(dwg, primitive, to_screen, preview)
        elif isinstance(primitive, Fill):
            element = _fill_path(dwg, primitive, to_screen, preview)
        else:
            element = _label_text(dwg, primitive, to_screen, preview)
        element["id"] = f"primitive_{index}"
        symbol_group.add(element)

    dwg.add(symbol_group)

    tracer.event(f"Preview drawn with {len(primitives)} primitives")

    return dwg


def _stroke_group(dwg, stroke, to_screen, preview):
    attrs = {
        "fill": "none",
        "stroke": preview.stroke_color,
        "stroke_width": preview.stroke_width,
        "class_": "stroke",
    }
    if stroke.dashed:
        attrs["stroke_dasharray"] = preview.dash_array

    group = dwg.g(**attrs)
    for part in geometry_parts(stroke.geometry):
        if part.is_empty:
            continue
        group.add(dwg.polyline(points=[to_screen(c) for c in part.coords]))
    return group


def _fill_path(dwg, fill, to_screen, preview):
    commands = []
    for polygon in geometry_parts(fill.geometry):
        for ring in [polygon.exterior, *polygon.interiors]:
            points = [to_screen(c) for c in ring.coords]
            commands.append("M " + " L ".join(f"{x:.3f},{y:.3f}" for x, y in points) + " Z")

    return dwg.path(
        d=" ".join(commands),
        fill=preview.fill_color,
        fill_rule="evenodd",
        stroke="none",
    )


def _label_text(dwg, label, to_screen, preview):
    x, y = to_screen(label.anchor)
    degrees = math.degrees(upright_rotation(label))

    return dwg.text(
        label.text,
        insert=(x, y),
        font_size=f"{preview.font_size}px",
        fill=preview.stroke_color,
        text_anchor="middle",
        dominant_baseline="middle",
        transform=f"rotate({degrees:.3f} {x:.3f} {y:.3f})",
        class_="label-text",
    )
