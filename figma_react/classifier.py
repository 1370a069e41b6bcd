"""
Node Classifier & Prop Extractor

以圖層名稱與型別做啟發式分類（按鈕、容器、輸入框、圖片…），並推導元件 props。
名稱比對一律是「原始名稱轉小寫後做子字串比對」，不使用清理過的識別字。
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from . import tokens
from .naming import to_prop_name

BUTTON_KEYWORDS = ("button", "btn")
CONTAINER_KEYWORDS = ("container", "wrapper", "layout", "section")
IMAGE_KEYWORDS = ("image", "img", "icon")
INPUT_KEYWORDS = ("input", "field")

VARIANT_TYPE = "'primary' | 'secondary' | 'outline' | 'text'"
VARIANT_DEFAULT = "'primary'"


class NodeRole(Enum):
    BUTTON = "button"
    CONTAINER = "container"
    INPUT = "input"
    IMAGE = "image"
    PLAIN = "plain"


@dataclass(frozen=True)
class PropertyDeclaration:
    """推導出的單一 prop（名稱、TS 型別、預設值、說明）."""
    name: str
    type: str
    default_value: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_optional(self) -> bool:
        return "?" in self.type or self.default_value is not None


def _name(node: dict) -> str:
    name = node.get("name") if isinstance(node, dict) else None
    return name.lower() if isinstance(name, str) else ""


def _has_keyword(node: dict, keywords: tuple) -> bool:
    name = _name(node)
    return any(k in name for k in keywords)


def _children(node: dict) -> list:
    children = node.get("children") if isinstance(node, dict) else None
    if not isinstance(children, (list, tuple)):
        return []
    return [c for c in children if isinstance(c, dict)]


def is_text_node(node: dict) -> bool:
    if not isinstance(node, dict):
        return False
    characters = node.get("characters")
    return node.get("type") == "TEXT" or (isinstance(characters, str) and len(characters) > 0)


def is_button_like(node: dict) -> bool:
    return _has_keyword(node, BUTTON_KEYWORDS)


def is_container_like(node: dict) -> bool:
    return bool(_children(node)) and _has_keyword(node, CONTAINER_KEYWORDS)


def is_variant_like(node: dict) -> bool:
    return "variant" in _name(node)


def is_input_like(node: dict) -> bool:
    return _has_keyword(node, INPUT_KEYWORDS)


def is_image_like(node: dict) -> bool:
    if not isinstance(node, dict):
        return False
    if node.get("type") == "IMAGE":
        return True
    if _has_keyword(node, IMAGE_KEYWORDS):
        return True
    fills = node.get("fills")
    if isinstance(fills, (list, tuple)):
        return any(isinstance(f, dict) and f.get("type") == "IMAGE" for f in fills)
    return False


def classify(node: dict) -> NodeRole:
    """回傳節點的主要角色；多個條件同時成立時依 Button → Container → Input → Image 優先."""
    if is_button_like(node):
        return NodeRole.BUTTON
    if is_container_like(node):
        return NodeRole.CONTAINER
    if is_input_like(node):
        return NodeRole.INPUT
    if is_image_like(node):
        return NodeRole.IMAGE
    return NodeRole.PLAIN


def heading_level(node: dict) -> int:
    """由 style.fontSize 推斷標題層級（h1–h6）；沒有 style 時預設 h2."""
    style = node.get("style") if isinstance(node, dict) else None
    if not isinstance(style, dict):
        return 2
    font_size = style.get("fontSize")
    if isinstance(font_size, bool) or not isinstance(font_size, (int, float)):
        return tokens.DEFAULT_HEADING_LEVEL
    for minimum, level in tokens.HEADING_LEVELS:
        if font_size >= minimum:
            return level
    return tokens.DEFAULT_HEADING_LEVEL


def text_prop(node: dict) -> Optional[PropertyDeclaration]:
    if not isinstance(node, dict) or node.get("type") != "TEXT":
        return None
    characters = node.get("characters")
    if not isinstance(characters, str) or not characters:
        return None
    raw_name = node.get("name") if isinstance(node.get("name"), str) else ""
    return PropertyDeclaration(
        name=to_prop_name(raw_name) or "text",
        type="string",
        default_value=json.dumps(characters, ensure_ascii=False),
        description=f"Text content for {raw_name}",
    )


def extract_props(node: dict) -> list:
    """推導節點的 props：文字 → variant → onClick → children → className."""
    props = []

    prop = text_prop(node)
    if prop:
        props.append(prop)

    if is_variant_like(node):
        props.append(PropertyDeclaration(
            name="variant",
            type=VARIANT_TYPE,
            default_value=VARIANT_DEFAULT,
            description="Visual variant of the component",
        ))

    if is_button_like(node):
        props.append(PropertyDeclaration(
            name="onClick",
            type="() => void",
            description="Function called when button is clicked",
        ))

    if is_container_like(node):
        props.append(PropertyDeclaration(
            name="children",
            type="React.ReactNode",
            description="Child elements to render inside the component",
        ))

    props.append(PropertyDeclaration(
        name="className",
        type="string",
        description="Additional CSS classes to apply",
    ))
    return props


def dedupe_props(props) -> list:
    """依名稱去重，保留第一次出現者."""
    seen = set()
    unique = []
    for prop in props:
        if prop.name in seen:
            continue
        seen.add(prop.name)
        unique.append(prop)
    return unique
