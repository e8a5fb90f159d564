from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional, Tuple, Union

from ..utils import normalize_color


class BarChartConfig(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    bar_spacing: float = Field(10.0, description="Horizontal distance between bars")
    color: str = Field("steelblue", description="Bar fill color")
    bar_height: float = Field(100.0, description="Height of the tallest bar")
    graph_width: float = Field(100.0, description="Width of the drawable area")

    @field_validator("color", mode="before")
    @classmethod
    def _normalize_color(cls, v: Union[str, Tuple[int, int, int], List[int]]):
        return normalize_color(v)


class BarChartSchema(BarChartConfig):
    title: Optional[str] = None
    values: List[float] = Field(default_factory=list)

    def config(self) -> BarChartConfig:
        return BarChartConfig(
            bar_spacing=self.bar_spacing,
            color=self.color,
            bar_height=self.bar_height,
            graph_width=self.graph_width,
        )


# Export as Schema for consistent naming
Schema = BarChartSchema
