"""Pytest configuration"""

import pytest

from tmuxlayout.layout.types import Leaf
from tmuxlayout.telemetry import metrics


@pytest.fixture
def anyio_backend():
    """Run anyio tests on asyncio only"""
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_metrics():
    """Start every test with empty counters"""
    metrics.reset()
    yield
    metrics.reset()


def _shape(node) -> tuple:
    geom = (node.width, node.height, node.x, node.y)
    if isinstance(node, Leaf):
        return ("pane", geom)
    return (node.orientation.value, geom, tuple(_shape(child) for child in node.children))


@pytest.fixture
def layout_shape():
    """Structural fingerprint of a layout tree: orientation and geometry, no pane data"""
    return _shape
