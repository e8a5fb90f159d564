# Pydantic schemas for chart validation

# Import all schemas for easier access
from . import bar_chart

__all__ = [
    "bar_chart",
]
