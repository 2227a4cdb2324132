"""Pytest fixtures for tacdraw tests."""

import pytest
from shapely.geometry import LineString


@pytest.fixture
def kernel():
    """Geometry kernel with the default tessellation."""
    from tacdraw.geometry.kernel import GeometryKernel
    return GeometryKernel()


@pytest.fixture
def ctx(kernel):
    """Style context around the default kernel."""
    from tacdraw.styles.context import StyleContext
    return StyleContext(kernel)


@pytest.fixture
def river_crossing():
    """Horizontal crossing axis 100 units long."""
    return LineString([(0, 0), (100, 0)])


@pytest.fixture
def short_axis():
    """Horizontal task axis 10 units long."""
    return LineString([(0, 0), (10, 0)])


@pytest.fixture
def diagonal_axis():
    """Axis pointing north-east, off the coordinate origin."""
    return LineString([(1000, 2000), (1060, 2080)])


@pytest.fixture
def default_config():
    """Create default configuration."""
    from tacdraw.config import SynthesisConfig
    return SynthesisConfig()
