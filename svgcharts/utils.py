import logging
import math

logger = logging.getLogger("svgcharts")


def rgb_to_hex(r, g, b):
    """RGBタプルをHEXカラーコードに変換する"""
    return "#{:02X}{:02X}{:02X}".format(
        max(0, min(255, int(r))),
        max(0, min(255, int(g))),
        max(0, min(255, int(b))),
    )


def normalize_color(color_val):
    """
    (r,g,b) or [r,g,b] -> "#RRGGBB"
    文字列（"red", "#ff0000" など）はそのまま返す。
    """
    if isinstance(color_val, (tuple, list)):
        if len(color_val) != 3:
            raise ValueError(f"RGB color needs 3 components, got {len(color_val)}")
        return rgb_to_hex(*color_val)
    if isinstance(color_val, str):
        color_val = color_val.strip()
        if not color_val:
            raise ValueError("color must not be empty")
        return color_val
    raise ValueError(f"Unsupported color value: {color_val!r}")


def format_tick(value: float, ndigits: int = 2) -> str:
    """目盛りラベル用: 小数第2位で丸め、末尾の .0 を落とす（inf / nan はそのまま）"""
    if not math.isfinite(value):
        return str(value)
    r = round(value, ndigits)
    if r == int(r):
        return str(int(r))
    return str(r)


def get_logger(context):
    """コンテキストからロガーを取得（無ければパッケージロガー）"""
    return (context or {}).get("logger") or logger


def to_svg_string(element) -> str:
    """svgwrite の要素（Drawing / Group など）をマークアップ文字列にする"""
    return element.tostring()
