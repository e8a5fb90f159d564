# -*- coding: utf-8 -*-
"""
render.py
- IR(YAML) を読み込み、チャートを決定論的に SVG へ描画するオーケストレータ。
- 特色:
  * ツールローディング: tool 名から schemas / renderers モジュールを動的に解決
  * IR ノーマライザー: list ルートや単一コンポーネントなど緩い入力も包んで処理
  * テーマ: theme.bar_color をデフォルト色として補完
  * 弱い失敗: 1 チャートの失敗で全体を止めない
"""
from __future__ import annotations

import argparse
import importlib
import importlib.util
import logging
from pathlib import Path
import re
import sys
import yaml

from chart_schema import ChartDocumentSchema
from svgcharts import utils

logger = logging.getLogger(__name__)


# =========================================================
# Tool Loader
# =========================================================
def _sanitize_module_name(name: str) -> str:
    n = (name or "").strip()
    n = n.replace("-", "_").replace(" ", "_")
    n = re.sub(r"[^0-9a-zA-Z_]", "_", n)
    return n.lower()


def _load_attr(package: str, tool_name: str, attr: str):
    mod_name = _sanitize_module_name(tool_name)
    full = f"svgcharts.{package}.{mod_name}"
    try:
        spec = importlib.util.find_spec(full)
    except ModuleNotFoundError:
        spec = None
    if spec is None:
        logger.warning(
            f"{package[:-1].capitalize()} for tool '{tool_name}' not found. "
            f"Expected 'svgcharts/{package}/{mod_name}.py' with '{attr}'."
        )
        return None
    try:
        module = importlib.import_module(full)
    except Exception as e:
        logger.warning(f"Failed to import '{full}': {type(e).__name__}: {e}")
        return None
    if not hasattr(module, attr):
        logger.warning(f"Module '{full}' loaded, but no '{attr}' found.")
        return None
    return getattr(module, attr)


def load_schema(tool_name: str):
    """ツール名から動的にPydanticスキーマを読み込む"""
    return _load_attr("schemas", tool_name, "Schema")


def load_renderer(tool_name: str):
    """ツール名から動的にレンダラー関数を読み込む"""
    return _load_attr("renderers", tool_name, "render")


# =========================================================
# IR normalizer
# =========================================================
def _normalize_ir(ir):
    """
    受け取った IR を {version, meta, theme, charts} に正規化する。
    - list ルート: charts とみなす
    - dict ルート: tool があれば単一チャート / components だけなら charts に読み替え
    """

    def _mk_min(charts):
        return {"version": 1, "meta": {}, "theme": {}, "charts": charts}

    if isinstance(ir, list):
        return _mk_min(ir)

    if isinstance(ir, dict):
        if "tool" in ir:
            return _mk_min([ir])
        ir.setdefault("version", 1)
        ir["meta"] = ir.get("meta") or {}
        ir["theme"] = ir.get("theme") or {}
        if "charts" not in ir:
            ir["charts"] = ir.pop("components", None) or []
        return ir

    raise TypeError(f"IR must be dict or list. Got: {type(ir)}")


def _drop_invalid_components(charts):
    kept = []
    for comp in charts:
        if not isinstance(comp, dict) or not comp.get("tool"):
            logger.warning(f"Component is missing 'tool'. Skipping. {comp}")
            continue
        kept.append(comp)
    return kept


def _apply_theme(raw_data: dict, theme: dict) -> dict:
    """テーマの既定値をデータに補完する（データ側の指定が優先）"""
    data = dict(raw_data or {})
    if "color" not in data and theme.get("bar_color"):
        data["color"] = theme["bar_color"]
    return data


# =========================================================
# Render
# =========================================================
def render_charts(ir_path: str, output_dir: str) -> list:
    """YAML IRを読み込み、チャートごとに SVG ファイルを書き出す"""
    with open(ir_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    ir = _normalize_ir(raw)
    ir["charts"] = _drop_invalid_components(ir.get("charts") or [])
    doc = ChartDocumentSchema(**ir)
    logger.debug(f"{len(doc.charts)} chart(s), tools: {doc.get_tools_used()}")

    theme = doc.theme or {}
    context = {"logger": logger, "theme": theme}

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    written = []

    for comp_idx, comp in enumerate(doc.charts, start=1):
        tool_name = comp.tool.value if hasattr(comp.tool, "value") else str(comp.tool)
        comp_id = comp.id or f"{_sanitize_module_name(tool_name)}_{comp_idx}"

        schema_class = load_schema(tool_name)
        render = load_renderer(tool_name)
        if schema_class is None or render is None:
            logger.warning(f"Tool '{tool_name}' could not be loaded. Skipping '{comp_id}'.")
            continue

        try:
            validated_data = schema_class(**_apply_theme(comp.data, theme))
            logger.info(f"Validated data for '{comp_id}' (tool: '{tool_name}')")
        except Exception as e:
            logger.warning(
                f"Schema validation failed for component '{comp_id}' (tool: '{tool_name}'): {e}"
            )
            logger.warning(f"Skipping component '{comp_id}' due to validation error.")
            continue

        try:
            element = render(
                data=validated_data,
                context={**context, "fragment": bool(comp.fragment)},
            )
            path = out / f"{comp_id}.svg"
            path.write_text(utils.to_svg_string(element), encoding="utf-8")
            written.append(path)
            logger.info(f"Wrote {path}")
        except Exception as e:
            # 弱い失敗: チャート描画に失敗しても全体処理は継続
            logger.error(f"Error rendering component {comp_id}: {e}")

    return written


# =========================================================
# CLI
# =========================================================
def _build_arg_parser():
    p = argparse.ArgumentParser(description="Render SVG charts from IR(YAML).")
    p.add_argument(
        "input", nargs="?", default="examples/sample.yaml", help="Path to IR YAML"
    )
    p.add_argument(
        "-o", "--output", default="dist", help="Directory for the .svg files"
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return p


def main(argv=None):
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    written = render_charts(args.input, args.output)
    return 0 if written else 1


if __name__ == "__main__":
    sys.exit(main())
