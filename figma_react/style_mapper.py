"""
Style Mapper — Figma 節點視覺屬性 → Tailwind utility class

規則依固定類別順序套用：填色 → 文字 → 尺寸 → 圓角 → 邊框 → 陰影。
所有函式皆為 total：屬性缺漏或格式錯誤時不產生 token，不拋例外。
"""

import math
from typing import Optional

from . import tokens


def _num(value) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value):
        return None
    return float(value)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _first(seq) -> Optional[dict]:
    if isinstance(seq, (list, tuple)) and seq and isinstance(seq[0], dict):
        return seq[0]
    return None


def figma_color_to_hex(color: dict) -> Optional[str]:
    """Figma {r, g, b}（0–1 浮點數）→ #rrggbb."""
    if not isinstance(color, dict):
        return None
    channels = []
    for key in ("r", "g", "b"):
        v = _num(color.get(key, 0))
        if v is None:
            return None
        channels.append(min(255, max(0, _round_half_up(v * 255))))
    return "#" + "".join(f"{c:02x}" for c in channels)


def _hex_to_rgb(hex_color: str) -> tuple:
    return (
        int(hex_color[1:3], 16),
        int(hex_color[3:5], 16),
        int(hex_color[5:7], 16),
    )


def closest_color(hex_color: str, prefix: str = "text-") -> str:
    """以 RGB 歐氏距離找最近的調色盤顏色；距離相同取宣告順序較前者."""
    r1, g1, b1 = _hex_to_rgb(hex_color)
    best_token = tokens.COLOR_PALETTE[0][1]
    best_distance = None
    for palette_hex, token in tokens.COLOR_PALETTE:
        r2, g2, b2 = _hex_to_rgb(palette_hex)
        distance = math.sqrt((r1 - r2) ** 2 + (g1 - g2) ** 2 + (b1 - b2) ** 2)
        if best_distance is None or distance < best_distance:
            best_distance = distance
            best_token = token
    if prefix != "text-":
        return prefix + best_token[len("text-"):]
    return best_token


def _solid_color_token(paint: Optional[dict], prefix: str) -> Optional[str]:
    if not paint or paint.get("type") != "SOLID":
        return None
    hex_color = figma_color_to_hex(paint.get("color"))
    if hex_color is None:
        return None
    return closest_color(hex_color, prefix)


def _fill_classes(node: dict) -> list:
    fill = _first(node.get("fills"))
    token = _solid_color_token(fill, "text-")
    if token is None:
        return []
    classes = [token]
    opacity = _num(fill.get("opacity"))
    if opacity is not None and opacity < 1:
        classes.append(f"opacity-{_round_half_up(opacity * 100)}")
    return classes


def _typography_classes(node: dict) -> list:
    style = node.get("style")
    if not isinstance(style, dict):
        return []
    classes = []
    font_size = _num(style.get("fontSize"))
    if font_size is not None:
        classes.append(tokens.lookup_le(tokens.FONT_SIZES, font_size))
    font_weight = _num(style.get("fontWeight"))
    if font_weight is not None:
        classes.append(tokens.lookup_lt(tokens.FONT_WEIGHTS, font_weight))
    line_height = _num(style.get("lineHeight"))
    if line_height is not None:
        classes.append(tokens.lookup_le(tokens.LINE_HEIGHTS, line_height))
    letter_spacing = _num(style.get("letterSpacing"))
    if letter_spacing is not None:
        classes.append(tokens.lookup_le(tokens.LETTER_SPACINGS, letter_spacing))
    return classes


def _size_classes(node: dict) -> list:
    bbox = node.get("absoluteBoundingBox")
    if not isinstance(bbox, dict):
        return []
    classes = []
    width = _num(bbox.get("width"))
    if width is not None:
        classes.append("w-" + tokens.lookup_le(tokens.SIZE_SCALE, width))
    height = _num(bbox.get("height"))
    if height is not None:
        classes.append("h-" + tokens.lookup_le(tokens.SIZE_SCALE, height))
    return classes


def _radius_classes(node: dict) -> list:
    radius = _num(node.get("cornerRadius"))
    # 0 代表沒有圓角
    if not radius:
        return []
    return [tokens.lookup_le(tokens.CORNER_RADII, radius)]


def _border_classes(node: dict) -> list:
    token = _solid_color_token(_first(node.get("strokes")), "border-")
    if token is None:
        return []
    classes = [token]
    weight = _num(node.get("strokeWeight"))
    if weight:
        classes.append(tokens.lookup_le(tokens.STROKE_WEIGHTS, weight))
    return classes


def shadow_tier(effect: dict) -> str:
    """DROP_SHADOW effect → shadow-sm / shadow / shadow-md / shadow-lg / shadow-xl."""
    offset = effect.get("offset") if isinstance(effect.get("offset"), dict) else {}
    x = _num(offset.get("x")) or 0.0
    y = _num(offset.get("y")) or 0.0
    radius = _num(effect.get("radius")) or 0.0

    max_y, max_radius, token = tokens.SHADOW_SM
    if x == 0 and y == max_y and radius <= max_radius:
        return token
    for max_y, max_radius, token in tokens.SHADOW_TIERS:
        if y <= max_y and radius <= max_radius:
            return token
    return tokens.SHADOW_FALLBACK


def _shadow_classes(node: dict) -> list:
    effects = node.get("effects")
    if not isinstance(effects, (list, tuple)):
        return []
    for effect in effects:
        if isinstance(effect, dict) and effect.get("type") == "DROP_SHADOW":
            return [shadow_tier(effect)]
    return []


_CATEGORIES = (
    _fill_classes,
    _typography_classes,
    _size_classes,
    _radius_classes,
    _border_classes,
    _shadow_classes,
)


def map_styles(node: dict) -> list:
    """將單一 Figma 節點的視覺屬性轉成 Tailwind class 清單（順序固定）."""
    if not isinstance(node, dict):
        return []
    classes = []
    for category in _CATEGORIES:
        classes.extend(category(node))
    return classes
