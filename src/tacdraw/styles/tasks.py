"""
Mission task symbols (TACGRP.TSK).

The base geometry runs from the friendly side towards the objective.
Each symbol carries a single-letter label turned along the axis.
"""

from tacdraw.styles.commons import axis_label, open_arrow, perpendicular_bar
from tacdraw.styles.registry import style


@style("G*T*X-----")
def clear(ctx, line, width, resolution):
    """
    CLEAR

    Three shafts ending in open arrows against a bar at the objective.
    The outer shafts run at 0.75 * width / 2 either side of the axis and
    the bar reaches width / 2 either side.
    """
    ts = ctx.kernel
    coords = ts.coordinates(line)
    segment = ts.segment(coords)
    angle = segment.angle()
    start, end = coords[0], coords[-1]

    p00, p01 = ts.project_coordinates(width / 2, angle, start, [[0, 0.75], [0, -0.75]])
    p10, p11, p20, p21 = ts.project_coordinates(
        width / 2, angle, end, [[0, 0.75], [0, -0.75], [0, 1], [0, -1]]
    )

    arrows = [open_arrow(ts, resolution, angle, coord) for coord in (p10, end, p11)]
    geometry = ts.collect([
        line,
        ts.line_string([p00, p10]),
        ts.line_string([p01, p11]),
        ts.line_string([p20, p21]),
        *arrows,
    ])

    return [
        ctx.default_stroke(geometry),
        axis_label(ctx, segment, "C"),
    ]


@style("G*T*B-----")
def block(ctx, line, width, resolution):
    """BLOCK: axis ending in a bar across the objective."""
    ts = ctx.kernel
    segment = ts.segment(line)
    geometry = ts.collect([
        line,
        perpendicular_bar(ts, width / 2, segment.angle(), segment.end),
    ])

    return [
        ctx.default_stroke(geometry),
        axis_label(ctx, segment, "B"),
    ]


@style("G*T*P-----")
def penetrate(ctx, line, width, resolution):
    """PENETRATE: bar at the start, axis arrow into the objective."""
    ts = ctx.kernel
    segment = ts.segment(line)
    angle = segment.angle()
    geometry = ts.collect([
        line,
        perpendicular_bar(ts, width / 2, angle, segment.start),
        open_arrow(ts, resolution, angle, segment.end),
    ])

    return [
        ctx.default_stroke(geometry),
        axis_label(ctx, segment, "P"),
    ]


def _open_box(ts, segment, width):
    """Bar across the start plus two legs running to the far end."""
    angle = segment.angle()
    a0, a1 = ts.project_coordinates(width / 2, angle, segment.start, [[0, 1], [0, -1]])
    b0, b1 = ts.project_coordinates(width / 2, angle, segment.end, [[0, 1], [0, -1]])
    return [
        ts.line_string([a0, a1]),
        ts.line_string([a0, b0]),
        ts.line_string([a1, b1]),
    ], (b0, b1)


@style("G*T*Y-----")
def bypass(ctx, line, width, resolution):
    """BYPASS: open box whose legs end in arrows."""
    ts = ctx.kernel
    segment = ts.segment(line)
    parts, leg_ends = _open_box(ts, segment, width)
    arrows = [open_arrow(ts, resolution, segment.angle(), coord) for coord in leg_ends]

    return [
        ctx.default_stroke(ts.collect(parts + arrows)),
        axis_label(ctx, segment, "B"),
    ]


@style("G*T*C-----")
def canalize(ctx, line, width, resolution):
    """CANALIZE: open box without arrows."""
    ts = ctx.kernel
    segment = ts.segment(line)
    parts, _ = _open_box(ts, segment, width)

    return [
        ctx.default_stroke(ts.collect(parts)),
        axis_label(ctx, segment, "C"),
    ]
