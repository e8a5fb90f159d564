from dataclasses import dataclass
import math
from typing import List, Sequence

import svgwrite
from svgwrite.container import Group
from svgwrite.shapes import Line, Rect
from svgwrite.text import Text

from ..utils import format_tick, get_logger
from ..schemas.bar_chart import BarChartConfig, BarChartSchema

AXIS_OFFSET = 2  # 軸を原点から少し外側に引く
AXIS_STROKE = "black"
AXIS_STROKE_WIDTH = 1
TICK_LENGTH = 4
LABEL_GAP = 2
LABEL_FONT_SIZE = 10
BAR_WIDTH_RATIO = 0.8
TICK_FRACTIONS = (0.0, 0.5, 1.0)

# ドキュメントの余白（合計で幅・高さ +40）
LEFT_MARGIN = 30
RIGHT_MARGIN = 10
TOP_MARGIN = 10
BOTTOM_MARGIN = 30


@dataclass(frozen=True)
class BarPoint:
    x: float
    fraction: float


def series_max(data: Sequence[float]) -> float:
    """系列の最大値（空、または有限値が無ければ 0）。inf / nan は無視する"""
    finite = [v for v in data if math.isfinite(v)]
    return max(finite) if finite else 0


def normalize(data: Sequence[float], bar_spacing: float) -> List[BarPoint]:
    """
    各値を (x 位置, 最大値に対する割合) に変換する。
    - 最大値が 0 以下なら割合は 0
    - 負の値と inf / nan は 0 に丸める（SVG は負の高さを受け付けない）
    """
    peak = series_max(data)
    points = []
    for i, v in enumerate(data):
        fraction = v / peak if peak > 0 and math.isfinite(v) else 0.0
        points.append(BarPoint(x=i * bar_spacing, fraction=max(0.0, fraction)))
    return points


def _axis_line(start, end):
    return Line(
        start=start,
        end=end,
        stroke=AXIS_STROKE,
        stroke_width=AXIS_STROKE_WIDTH,
    )


def render_fragment(config: BarChartConfig, data: Sequence[float]) -> Group:
    """棒・軸・目盛りラベルを y 上向き座標系の <g> として描画する"""
    group = Group(class_="bar-chart")
    bar_width = config.bar_spacing * BAR_WIDTH_RATIO

    for p in normalize(data, config.bar_spacing):
        group.add(
            Rect(
                insert=(p.x, 0),
                size=(bar_width, p.fraction * config.bar_height),
                fill=config.color,
            )
        )

    # x 軸 / y 軸
    group.add(
        _axis_line((-AXIS_OFFSET, -AXIS_OFFSET), (config.graph_width, -AXIS_OFFSET))
    )
    group.add(
        _axis_line((-AXIS_OFFSET, -AXIS_OFFSET), (-AXIS_OFFSET, config.bar_height))
    )

    peak = series_max(data)
    for fraction in TICK_FRACTIONS:
        y = fraction * config.bar_height
        group.add(_axis_line((-AXIS_OFFSET - TICK_LENGTH, y), (-AXIS_OFFSET, y)))

    for fraction in TICK_FRACTIONS:
        y = fraction * config.bar_height
        label = "0" if fraction == 0 else format_tick(peak * fraction)
        # 反転座標系の中で文字が正立するよう、ラベルだけ y を戻す
        group.add(
            Text(
                label,
                insert=(
                    -AXIS_OFFSET - TICK_LENGTH - LABEL_GAP,
                    -y + LABEL_FONT_SIZE * 0.35,
                ),
                transform="scale(1,-1)",
                font_size=LABEL_FONT_SIZE,
                text_anchor="end",
            )
        )

    return group


def render_document(config: BarChartConfig, data: Sequence[float]) -> svgwrite.Drawing:
    """フラグメントを (graph_width+40) x (bar_height+40) の <svg> に包む"""
    width = config.graph_width + LEFT_MARGIN + RIGHT_MARGIN
    height = config.bar_height + TOP_MARGIN + BOTTOM_MARGIN
    # 長い目盛りラベルは左余白 (30) を越えるので、はみ出しても描画させる
    dwg = svgwrite.Drawing(size=(width, height), overflow="visible")

    # 原点を左下に移し y 軸を反転
    frame = dwg.g(
        transform=(
            f"translate({LEFT_MARGIN},{config.bar_height + TOP_MARGIN}) scale(1,-1)"
        )
    )
    frame.add(render_fragment(config, data))
    dwg.add(frame)
    return dwg


def render(data: BarChartSchema, context: dict = None):
    """棒グラフを描画する"""
    logger = get_logger(context)
    config = data.config()
    values = list(data.values)

    if not values:
        logger.warning("bar_chart: empty series, rendering axes only")
    logger.debug(
        f"bar_chart: {len(values)} bars, max={series_max(values)}, "
        f"spacing={config.bar_spacing}"
    )

    if (context or {}).get("fragment"):
        return render_fragment(config, values)

    dwg = render_document(config, values)
    if data.title:
        dwg.set_desc(title=data.title)
    return dwg
