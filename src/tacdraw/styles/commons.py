"""
Building blocks shared by several symbol families.

All helpers take the kernel explicitly and return new geometry.
"""

import math

# Arrowhead barb length in multiples of the sampling resolution
ARROW_SIZE = 7


def arrow_barbs(kernel, resolution, angle, tip):
    """The two barb ends of an arrowhead pointing along angle."""
    return kernel.project_coordinates(resolution * ARROW_SIZE, angle, tip, [[-1, 1], [-1, -1]])


def open_arrow(kernel, resolution, angle, tip):
    """Chevron arrowhead as a three-vertex line string."""
    p0, p1 = arrow_barbs(kernel, resolution, angle, tip)
    return kernel.line_string([p0, tip, p1])


def closed_arrow(kernel, resolution, angle, tip):
    """Triangular arrowhead region."""
    p0, p1 = arrow_barbs(kernel, resolution, angle, tip)
    return kernel.polygon([p0, tip, p1, p0])


def arrow_base(kernel, resolution, angle, tip):
    """Point on the shaft where the barbs of an arrowhead at tip meet it."""
    return kernel.project_coordinates(resolution * ARROW_SIZE, angle, tip, [[-1, 0]])[0]


def perpendicular_bar(kernel, distance, angle, origin):
    """Line across origin, reaching distance to either side."""
    return kernel.line_string(kernel.project_coordinates(distance, angle, origin, [[0, 1], [0, -1]]))


def crossing_outline(kernel, line, width):
    """
    Outline of a band of width / 2 around the line, open at both tips.

    Disks of radius width / 2 at the start and end points cut the round
    caps out of the outline, leaving two separate sides.
    """
    return kernel.difference([
        kernel.boundary(kernel.line_buffer(line, width / 2)),
        kernel.point_buffer(kernel.start_point(line), width / 2),
        kernel.point_buffer(kernel.end_point(line), width / 2),
    ])


def axis_label(ctx, segment, text):
    """Single label on the segment midpoint, turned along the segment."""
    return ctx.text(
        ctx.kernel.point(segment.mid_point()),
        text=text,
        rotation=math.pi - segment.angle(),
        flip=True,
    )
