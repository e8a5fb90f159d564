# SVG chart schemas and renderers
from .renderers.bar_chart import render_document, render_fragment
from .schemas.bar_chart import BarChartConfig, BarChartSchema

__all__ = [
    "BarChartConfig",
    "BarChartSchema",
    "render_document",
    "render_fragment",
]
