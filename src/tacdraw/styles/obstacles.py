"""
Obstacle crossing site symbols (TACGRP.MOBSU.OBSTBP.CSGSTE).

The base geometry is the crossing axis, drawn from the near bank to the
far bank.
"""

import math
from itertools import zip_longest

from tacdraw.styles.commons import ARROW_SIZE, arrow_base, closed_arrow, crossing_outline
from tacdraw.styles.registry import style


def interleave(first, second):
    """first[0], second[0], first[1], second[1], ... until both run out."""
    return [p for pair in zip_longest(first, second) for p in pair if p is not None]


@style("G*M*BCD---")
def ford_difficult(ctx, line, width, resolution):
    """
    FORD DIFFICULT

    Dashed outline open at both banks, crossed at mid-stream by a solid
    zig-zag of floor(width / resolution / 5) legs.
    """
    ts = ctx.kernel
    segment = ts.segment(line)
    angle = segment.angle()

    p0, p1 = ts.project_coordinates(width / 1.5, angle, segment.mid_point(), [[0, 1], [0, -1]])
    p00, p01 = ts.project_coordinates(resolution * 4, angle, p0, [[-1, 0], [1, 0]])
    p10, p11 = ts.project_coordinates(resolution * 4, angle, p1, [[-1, 0], [1, 0]])

    n = math.floor(width / resolution / 5)
    zigzag = interleave(
        ts.segmentize(ts.segment(p00, p10), n)[0::2],
        ts.segmentize(ts.segment(p01, p11), n)[1::2],
    )

    return [
        ctx.dashed_stroke(crossing_outline(ts, line, width)),
        ctx.solid_stroke(ts.line_string(zigzag)),
    ]


@style("G*M*BCE---")
def ford_easy(ctx, line, width, resolution):
    """
    FORD EASY: the open outline with a solid arrow along the axis.

    The shaft runs from the start to the arrowhead base and is left out
    when the axis is no longer than the arrowhead.
    """
    ts = ctx.kernel
    segment = ts.segment(line)
    angle = segment.angle()
    start, end = ts.start_point(line), ts.end_point(line)

    primitives = [ctx.dashed_stroke(crossing_outline(ts, line, width))]
    if segment.length() > resolution * ARROW_SIZE:
        primitives.append(ctx.solid_stroke(ts.line_string([start, arrow_base(ts, resolution, angle, end)])))
    primitives.append(ctx.fill(closed_arrow(ts, resolution, angle, end)))

    return primitives


@style("G*M*BCB---")
def bridge_or_gap(ctx, line, width, resolution):
    """BRIDGE OR GAP: two rails along the axis with outward flared ends."""
    ts = ctx.kernel
    segment = ts.segment(line)
    angle = segment.angle()

    rails = []
    for side in (1, -1):
        (a,) = ts.project_coordinates(width / 2, angle, segment.start, [[0, side]])
        (b,) = ts.project_coordinates(width / 2, angle, segment.end, [[0, side]])
        (flare_a,) = ts.project_coordinates(width / 4, angle, a, [[-1, side]])
        (flare_b,) = ts.project_coordinates(width / 4, angle, b, [[1, side]])
        rails.append(ts.line_string([flare_a, a, b, flare_b]))

    return [ctx.solid_stroke(ts.collect(rails))]
