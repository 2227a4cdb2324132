"""
Style context handed to every generator.

Bundles the geometry kernel with the primitive constructors, so a
generator needs nothing beyond its arguments.

Degenerate input is rejected by the kernel when the base geometry is read.
A geometry derived from valid input may still come out empty, e.g. an
outline that the end gaps cut away completely on a short axis; it is
drawn as the empty primitive it is.
"""

from tacdraw.geometry.kernel import GeometryKernel, as_coordinate
from tacdraw.models import Fill, Label, Stroke


class StyleContext:
    """Kernel capability plus Stroke/Fill/Label constructors."""

    def __init__(self, kernel=None):
        self.kernel = kernel or GeometryKernel()

    def solid_stroke(self, geometry):
        return Stroke(geometry=geometry, dashed=False)

    def dashed_stroke(self, geometry):
        return Stroke(geometry=geometry, dashed=True)

    def default_stroke(self, geometry):
        """The family's default line treatment, which is solid."""
        return self.solid_stroke(geometry)

    def fill(self, region):
        return Fill(geometry=region)

    def text(self, point, text, rotation=0.0, flip=False):
        """Label anchored at point (a shapely Point or a coordinate)."""
        return Label(anchor=as_coordinate(point), text=text, rotation=rotation, flip=flip)
