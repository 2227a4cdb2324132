"""End-to-end tests for synthesize()."""

import math

import pytest
from shapely.geometry import LineString, Point

from tacdraw.synthesis import get_registry

IDENTIFIERS = get_registry().identifiers()


class TestSynthesize:
    """Tests for the synthesis entry point."""

    def test_unknown_identifier_returns_none(self, river_crossing):
        """Test that a registry miss is reported as None."""
        from tacdraw.synthesis import synthesize

        assert synthesize("G*Z*NOTHING", river_crossing, 10, 1) is None

    def test_unknown_identifier_checked_before_parameters(self, river_crossing):
        """Test that a miss wins over bad parameters."""
        from tacdraw.synthesis import synthesize

        assert synthesize("G*Z*NOTHING", river_crossing, 0, 0) is None

    @pytest.mark.parametrize("identifier", IDENTIFIERS)
    @pytest.mark.parametrize("width,resolution", [(0, 1), (10, 0), (-10, 1), (10, -1), (float("nan"), 1), (10, float("inf"))])
    def test_non_positive_parameters_rejected(self, river_crossing, identifier, width, resolution):
        """Test that every symbol refuses non-positive width or resolution."""
        from tacdraw.errors import InvalidParameter
        from tacdraw.synthesis import synthesize

        with pytest.raises(InvalidParameter):
            synthesize(identifier, river_crossing, width, resolution)

    @pytest.mark.parametrize("identifier", IDENTIFIERS)
    def test_idempotent(self, diagonal_axis, identifier):
        """Test that identical inputs give deep-equal primitive lists."""
        from tacdraw.models import dump_primitives
        from tacdraw.synthesis import synthesize

        first = synthesize(identifier, diagonal_axis, 20, 1)
        second = synthesize(identifier, diagonal_axis, 20, 1)

        assert first == second
        assert dump_primitives(first) == dump_primitives(second)

    @pytest.mark.parametrize("identifier", IDENTIFIERS)
    def test_coordinate_list_input(self, identifier):
        """Test that a coordinate list behaves like the equivalent LineString."""
        from tacdraw.models import dump_primitives
        from tacdraw.synthesis import synthesize

        coords = [(0, 0), (100, 0)]
        from_list = synthesize(identifier, coords, 10, 1)
        from_line = synthesize(identifier, LineString(coords), 10, 1)

        assert dump_primitives(from_list) == dump_primitives(from_line)
        assert coords == [(0, 0), (100, 0)]

    def test_point_input_rejected(self):
        """Test that line symbols cannot be built on a point."""
        from tacdraw.errors import InvalidParameter
        from tacdraw.synthesis import synthesize

        with pytest.raises(InvalidParameter):
            synthesize("G*T*X-----", Point(0, 0), 4, 1)

    def test_zero_length_axis_rejected(self):
        """Test that a collapsed axis fails instead of drawing NaNs."""
        from tacdraw.errors import DegenerateGeometry
        from tacdraw.synthesis import synthesize

        with pytest.raises(DegenerateGeometry):
            synthesize("G*T*X-----", [(5, 5), (5, 5)], 4, 1)

    def test_custom_registry(self, short_axis):
        """Test that an injected registry replaces the default one."""
        from tacdraw.styles.registry import StyleRegistry
        from tacdraw.synthesis import synthesize

        def marker(ctx, line, width, resolution):
            return [ctx.text(ctx.kernel.point((0, 0)), text="X")]

        registry = StyleRegistry()
        registry.register("G*X*MARK--", marker)

        primitives = synthesize("G*X*MARK--", short_axis, 1, 1, registry=registry)

        assert [p.text for p in primitives] == ["X"]
        assert synthesize("G*T*X-----", short_axis, 4, 1, registry=registry) is None

    def test_custom_kernel(self, river_crossing):
        """Test that an injected kernel changes the outline tessellation only."""
        from tacdraw.geometry.kernel import GeometryKernel
        from tacdraw.synthesis import synthesize

        coarse = synthesize("G*M*BCD---", river_crossing, 10, 1, kernel=GeometryKernel(quad_segs=2))
        fine = synthesize("G*M*BCD---", river_crossing, 10, 1)

        assert len(coarse[0].geometry.geoms) == len(fine[0].geometry.geoms) == 2
        assert list(coarse[1].geometry.coords) == list(fine[1].geometry.coords)

    def test_kernel_from_config(self, default_config):
        """Test that the kernel tessellation comes from configuration."""
        from tacdraw.synthesis import kernel_from_config

        default_config.kernel.quad_segs = 4
        assert kernel_from_config(default_config).quad_segs == 4


class TestScenarios:
    """Reference scenarios for the two documented families."""

    def test_ford_difficult_scenario(self):
        """Test FORD DIFFICULT on a 100 unit axis, width 10, resolution 1."""
        from tacdraw.synthesis import synthesize

        outline, zigzag = synthesize("G*M*BCD---", [(0, 0), (100, 0)], 10, 1)

        assert outline.dashed and not zigzag.dashed
        assert len(outline.geometry.geoms) == 2
        assert outline.geometry.distance(Point(0, 0)) > 4.9
        assert outline.geometry.distance(Point(100, 0)) > 4.9

        coords = list(zigzag.geometry.coords)
        assert len(coords) - 1 == math.floor(10 / 1 / 5)
        assert zigzag.geometry.intersects(LineString([(0, 0), (100, 0)]))
        assert zigzag.geometry.distance(Point(50, 0)) <= 4 + 1e-9

    def test_clear_scenario(self):
        """Test CLEAR on a 10 unit axis, width 4."""
        from tacdraw.synthesis import synthesize

        stroke, label = synthesize("G*T*X-----", [(0, 0), (10, 0)], 4, 1)
        parts = [list(g.coords) for g in stroke.geometry.geoms]

        assert parts[1][0] == pytest.approx((0, 1.5))
        assert parts[2][0] == pytest.approx((0, -1.5))
        assert parts[1][1] == pytest.approx((10, 1.5))
        assert parts[2][1] == pytest.approx((10, -1.5))
        assert label.anchor == (5.0, 0.0)
        assert label.rotation == math.pi


class TestShortAxes:
    """Every symbol on an axis shorter than its width."""

    @pytest.mark.parametrize("identifier", IDENTIFIERS)
    @pytest.mark.parametrize("length", [0.5, 2, 8])
    def test_short_axis_synthesizes(self, identifier, length, default_config):
        """Test that a short but non-degenerate axis draws and previews without error."""
        from tacdraw.export.svg_preview import render_preview
        from tacdraw.models import dump_primitives
        from tacdraw.synthesis import synthesize

        primitives = synthesize(identifier, [(0, 0), (length, 0)], 10, 1)

        assert primitives
        assert len(dump_primitives(primitives)) == len(primitives)
        render_preview(primitives, default_config)
