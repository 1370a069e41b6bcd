"""
Accessibility — 在 JSX Element 樹上補上無障礙屬性

依序套用四個獨立步驟（每步各自重新判斷節點分類）：
  1. 文字節點 fontSize >= 16 → 最外層 <div> 改成 h1–h6（<p> 不變）
  2. 圖片類 → alt（有 <img>）或 role="img" + aria-label（以 div 代替背景圖）
  3. 按鈕類且沒有 <button> → role="button"、tabIndex、Enter 鍵觸發
  4. 輸入框類 → <label htmlFor> 包住 <input id aria-label>
"""

import logging
import re
from typing import Callable, Optional

from . import tokens
from .classifier import (
    heading_level,
    is_button_like,
    is_image_like,
    is_input_like,
    is_text_node,
)
from .markup import Element, Expr, MarkupSyntaxError, parse, render

logger = logging.getLogger(__name__)

_IMAGE_FILLER = r"(?:image|img|icon|picture|pic)"
_ALT_PREFIX = re.compile(rf"^{_IMAGE_FILLER}(?=[-_\s]|$)[-_\s]*", re.IGNORECASE)
_ALT_SUFFIX = re.compile(rf"(?:^|[-_\s]+){_IMAGE_FILLER}$", re.IGNORECASE)
_ALT_FILLER_ONLY = re.compile(rf"{_IMAGE_FILLER}", re.IGNORECASE)
_INPUT_FILLER = re.compile(r"form field|text field|input|field", re.IGNORECASE)

ENTER_KEY_HANDLER = '(e) => e.key === "Enter" && onClick && onClick(e)'


def _raw_name(node: dict) -> str:
    name = node.get("name") if isinstance(node, dict) else None
    return name if isinstance(name, str) else ""


def generate_alt_text(node: dict) -> str:
    alt = _ALT_PREFIX.sub("", _raw_name(node).strip())
    alt = _ALT_SUFFIX.sub("", alt).strip()
    if not alt or _ALT_FILLER_ONLY.fullmatch(alt):
        return "Image"
    return alt


def input_label_text(node: dict) -> str:
    label = " ".join(_INPUT_FILLER.sub("", _raw_name(node)).split())
    return label or "Input"


def input_id(node: dict) -> str:
    node_id = node.get("id", "") if isinstance(node, dict) else ""
    return "input-" + re.sub(r"[^a-zA-Z0-9]", "-", str(node_id))


def _first(root: Element, tags: tuple) -> Optional[Element]:
    for el in root.iter():
        if el.tag in tags:
            return el
    return None


def _replace(node: Element, match: Callable[[Element], bool], build: Callable[[Element], Element],
             first_only: bool = False) -> Element:
    """回傳替換後的新根節點；first_only 時只替換前序走訪的第一個符合者."""
    done = [False]

    def visit(el: Element) -> Element:
        if match(el) and not (first_only and done[0]):
            done[0] = True
            return build(el)
        el.children = [visit(c) if isinstance(c, Element) else c for c in el.children]
        return el

    return visit(node)


def _promote_heading(root: Element, node: dict) -> Element:
    if not is_text_node(node):
        return root
    style = node.get("style")
    font_size = style.get("fontSize") if isinstance(style, dict) else None
    if isinstance(font_size, bool) or not isinstance(font_size, (int, float)):
        return root
    if font_size < tokens.HEADING_FONT_SIZE_MIN:
        return root
    wrapper = _first(root, ("div",))
    if wrapper is not None:
        wrapper.tag = f"h{heading_level(node)}"
    return root


def _add_alt_text(root: Element, node: dict) -> Element:
    if not is_image_like(node):
        return root
    alt = generate_alt_text(node)
    images = root.find_all("img")
    if images:
        for img in images:
            img.attrs["alt"] = alt
        return root
    wrapper = _first(root, ("div",))
    if wrapper is not None:
        wrapper.attrs["role"] = "img"
        wrapper.attrs["aria-label"] = alt
    return root


def _add_button_role(root: Element, node: dict) -> Element:
    if not is_button_like(node) or root.contains("button"):
        return root
    wrapper = _first(root, ("div",))
    if wrapper is not None:
        wrapper.attrs["role"] = "button"
        wrapper.attrs["tabIndex"] = Expr("0")
        wrapper.attrs["onKeyDown"] = Expr(ENTER_KEY_HANDLER)
    return root


def _label_input(root: Element, node: dict) -> Element:
    if not is_input_like(node):
        return root
    iid = input_id(node)
    label = input_label_text(node)

    def wrap(source: Element) -> Element:
        attrs = dict(source.attrs)
        attrs["id"] = iid
        attrs["aria-label"] = label
        return Element("label", {"htmlFor": iid}, [label, Element("input", attrs)])

    if root.contains("input"):
        return _replace(root, lambda el: el.tag == "input", wrap)
    # 沒有 <input> 時把第一個 div 轉成 input（原本的子節點捨棄）
    return _replace(root, lambda el: el.tag == "div", wrap, first_only=True)


_PASSES = (_promote_heading, _add_alt_text, _add_button_role, _label_input)


def enhance_element(element: Element, node: dict) -> Element:
    """回傳補上無障礙屬性的新 Element 樹（不修改傳入的樹）."""
    root = element.copy()
    if not isinstance(node, dict):
        return root
    for apply_pass in _PASSES:
        root = apply_pass(root, node)
    return root


def enhance(markup: str, node: dict) -> str:
    """字串版：解析 → enhance_element → render；無法解析時原樣回傳."""
    try:
        root = parse(markup)
    except MarkupSyntaxError as e:
        logger.debug("enhance: markup not parseable, left unchanged (%s)", e)
        return markup
    return render(enhance_element(root, node))
