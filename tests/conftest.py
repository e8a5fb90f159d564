"""Pytest fixtures shared across chart tests."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from svgcharts.schemas.bar_chart import BarChartConfig
from svgcharts.utils import to_svg_string


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_svg(element) -> ET.Element:
    """Serialize an svgwrite element and parse it back into an ElementTree node."""

    return ET.fromstring(to_svg_string(element))


def find_all(root: ET.Element, name: str) -> list[ET.Element]:
    """Return every descendant (root included) whose local tag is ``name``."""

    return [node for node in root.iter() if _local(node.tag) == name]


@pytest.fixture
def example_config() -> BarChartConfig:
    """Return the reference configuration used in the chart examples."""

    return BarChartConfig(bar_spacing=10, color="red", bar_height=100, graph_width=100)


@pytest.fixture
def triangle() -> list[float]:
    """Return a small symmetric series peaking at 3."""

    return [0, 1, 2, 3, 2, 1, 0]
