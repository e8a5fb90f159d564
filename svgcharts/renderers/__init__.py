# Rendering implementations for charts

# Import all renderers for easier access
from . import bar_chart

__all__ = [
    "bar_chart",
]
