"""
Translator — Figma 節點樹 → JSX Element 樹 + imports + props

深度優先遞迴：子節點先完整轉換，再組出父節點。
依 node.type 分派；未知型別走 default。永不因屬性缺漏而失敗。
"""

from dataclasses import dataclass, field

from .classifier import (
    PropertyDeclaration,
    extract_props,
    is_button_like,
    text_prop,
)
from .markup import Element, Expr, render
from .naming import to_kebab
from .style_mapper import map_styles

SHAPE_TYPES = ("RECTANGLE", "ELLIPSE", "POLYGON", "STAR", "VECTOR", "LINE")
CONTAINER_TYPES = ("COMPONENT", "INSTANCE", "FRAME", "GROUP")


@dataclass
class TranslationResult:
    element: Element
    imports: list = field(default_factory=list)
    properties: list = field(default_factory=list)
    depth: int = 0

    @property
    def markup(self) -> str:
        return render(self.element, self.depth)


def _class_list(*parts) -> str:
    return " ".join(p for p in parts if p)


def _translate_text(node: dict, depth: int) -> TranslationResult:
    props = extract_props(node)
    prop = text_prop(node)
    if prop is None:
        # 沒有文字內容時仍需一個可綁定的 prop
        prop = PropertyDeclaration(name="text", type="string", description="Text content")
        props = [prop] + props
    element = Element("p", {"className": _class_list(*map_styles(node))}, [Expr(prop.name)])
    return TranslationResult(element, [], props, depth)


def _translate_shape(node: dict, depth: int) -> TranslationResult:
    classes = _class_list(
        *map_styles(node),
        str(node.get("type", "")).lower(),
        to_kebab(node.get("name", "")),
    )
    return TranslationResult(Element("div", {"className": classes}), [], [], depth)


def _translate_container(node: dict, depth: int) -> TranslationResult:
    own_props = extract_props(node)
    classes = _class_list(*map_styles(node), to_kebab(node.get("name", "")))

    imports: list = []
    child_props: list = []
    child_elements: list = []
    for child in node.get("children") or []:
        if not isinstance(child, dict):
            continue
        result = translate(child, depth + 1)
        child_elements.append(result.element)
        imports.extend(result.imports)
        child_props.extend(result.properties)

    if is_button_like(node):
        element = Element(
            "button",
            {"className": classes, "onClick": Expr("onClick")},
            child_elements,
        )
        return TranslationResult(element, imports, own_props + child_props, depth)

    # children placeholder 與實際子節點二擇一，不會同時輸出
    if any(p.name == "children" for p in own_props):
        element = Element("div", {"className": classes}, [Expr("children")])
        return TranslationResult(element, imports, own_props, depth)

    element = Element("div", {"className": classes}, child_elements)
    return TranslationResult(element, imports, own_props + child_props, depth)


def _translate_image(node: dict, depth: int) -> TranslationResult:
    name = node.get("name", "") if isinstance(node.get("name"), str) else ""
    element = Element("img", {
        "src": f"{to_kebab(name)}.png",
        "className": _class_list(*map_styles(node)),
        "alt": name,
    })
    props = [PropertyDeclaration(name="src", type="string", description="Image source URL")]
    return TranslationResult(element, [], props, depth)


def _translate_default(node: dict, depth: int) -> TranslationResult:
    element = Element("div", {"className": to_kebab(node.get("name", ""))})
    return TranslationResult(element, [], [], depth)


def translate(node: dict, depth: int = 0) -> TranslationResult:
    """將單一 Figma 節點（含子樹）轉成 TranslationResult."""
    if not isinstance(node, dict):
        node = {}
    node_type = node.get("type")
    if node_type == "TEXT":
        return _translate_text(node, depth)
    if node_type in SHAPE_TYPES:
        return _translate_shape(node, depth)
    if node_type in CONTAINER_TYPES:
        return _translate_container(node, depth)
    if node_type == "IMAGE":
        return _translate_image(node, depth)
    return _translate_default(node, depth)
