from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union, Any, Dict
from enum import Enum


class ChartToolType(str, Enum):
    """Known tool names.

    Keeps a canonical list but components may use arbitrary strings.
    """

    BAR_CHART = "bar_chart"


class ChartComponent(BaseModel):
    """Single chart entry in `charts[]`.

    Mirrors the IR used by `render.py`.
    """

    tool: Union[ChartToolType, str] = Field(
        ...,
        description="Tool name (e.g. 'bar_chart')",
    )
    id: Optional[str] = Field(None, description="Component id, used as file name")
    data: Optional[Dict[str, Any]] = Field(
        default_factory=dict,
        description="Tool data payload",
    )
    fragment: Optional[bool] = Field(
        False,
        description="Write the bare <g> fragment instead of a full <svg>",
    )


class ChartMetadata(BaseModel):
    """Top-level metadata object matching render.py's `meta` map."""

    title: Optional[str] = Field(None, description="Document title")
    author: Optional[str] = Field(None, description="Document author")
    description: Optional[str] = Field(None, description="Brief description")
    created_date: Optional[str] = Field(None, description="Creation date")


class ChartDocumentSchema(BaseModel):
    """Top-level IR schema consumed by the renderer.

    Expected top-level keys: version, meta, theme, charts
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    version: int = Field(1, description="IR version")
    meta: ChartMetadata = Field(
        default_factory=ChartMetadata,
        description="Document metadata (meta)",
    )
    theme: Optional[Dict[str, Any]] = Field(
        default_factory=dict, description="Theme mapping (e.g. bar_color)"
    )
    charts: List[ChartComponent] = Field(
        default_factory=list,
        description="Ordered charts",
    )

    def get_tools_used(self) -> List[str]:
        tools = set()
        for comp in self.charts:
            t = comp.tool.value if isinstance(comp.tool, ChartToolType) else str(comp.tool)
            tools.add(t)
        return sorted(list(tools))
