"""
JSX 中介結構 — Element 樹、序列化與解析

Translator 產出 Element 樹，Accessibility 在樹上改寫，最後才 render 成字串。
parse() 只支援本套件自己產生的 JSX 子集（標籤、"字串" 與 {運算式} 屬性、文字、{運算式} 子節點）。
"""

import json
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from .errors import FigmaReactError

VOID_TAGS = {"img", "input", "br", "hr"}
INDENT = "  "


class MarkupSyntaxError(FigmaReactError, ValueError):
    """JSX 字串無法解析."""


class Expr(str):
    """JSX {…} 運算式（屬性值或子節點）."""

    def __repr__(self) -> str:
        return f"Expr({str.__repr__(self)})"


@dataclass
class Element:
    tag: str
    # 值為 str → name="…"；Expr → name={…}；None → 布林屬性
    attrs: dict = field(default_factory=dict)
    children: list = field(default_factory=list)

    def iter(self) -> Iterator["Element"]:
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()

    def find_all(self, tag: str) -> list:
        return [el for el in self.iter() if el.tag == tag]

    def contains(self, tag: str) -> bool:
        return any(el.tag == tag for el in self.iter())

    def copy(self) -> "Element":
        return Element(
            tag=self.tag,
            attrs=dict(self.attrs),
            children=[c.copy() if isinstance(c, Element) else c for c in self.children],
        )


Child = Union[Element, Expr, str]


# ─── render ─────────────────────────────────────────────────────────────────

def _render_attr(name: str, value) -> str:
    if value is None:
        return f" {name}"
    if isinstance(value, Expr):
        return f" {name}={{{value}}}"
    if '"' in value:
        return f" {name}={{{json.dumps(value, ensure_ascii=False)}}}"
    return f' {name}="{value}"'


def _render_inline(child: Child) -> str:
    if isinstance(child, Expr):
        return f"{{{child}}}"
    if any(ch in child for ch in "{}<>\"'`"):
        return f"{{{json.dumps(child, ensure_ascii=False)}}}"
    return child


def _lines(node: Child, level: int) -> list:
    pad = INDENT * level
    if not isinstance(node, Element):
        return [pad + _render_inline(node)]

    open_tag = f"<{node.tag}" + "".join(_render_attr(k, v) for k, v in node.attrs.items())
    children = node.children
    if not children:
        if node.tag in VOID_TAGS:
            return [f"{pad}{open_tag} />"]
        return [f"{pad}{open_tag}></{node.tag}>"]
    if len(children) == 1 and not isinstance(children[0], Element):
        return [f"{pad}{open_tag}>{_render_inline(children[0])}</{node.tag}>"]

    lines = [f"{pad}{open_tag}>"]
    for child in children:
        lines.extend(_lines(child, level + 1))
    lines.append(f"{pad}</{node.tag}>")
    return lines


def render(node: Child, depth: int = 0) -> str:
    """序列化為 JSX；巢狀行依 depth 縮排，第一行不縮排（由呼叫端決定位置）."""
    lines = _lines(node, depth)
    lines[0] = lines[0].lstrip()
    return "\n".join(lines)


# ─── parse ──────────────────────────────────────────────────────────────────

class _Parser:
    def __init__(self, source: str):
        self.src = source
        self.pos = 0

    def error(self, msg: str) -> MarkupSyntaxError:
        return MarkupSyntaxError(f"{msg} at offset {self.pos}")

    def peek(self, s: str) -> bool:
        return self.src.startswith(s, self.pos)

    def skip_ws(self) -> None:
        while self.pos < len(self.src) and self.src[self.pos].isspace():
            self.pos += 1

    def read_name(self) -> str:
        start = self.pos
        while self.pos < len(self.src) and (self.src[self.pos].isalnum() or self.src[self.pos] in "-_:."):
            self.pos += 1
        if start == self.pos:
            raise self.error("expected a name")
        return self.src[start:self.pos]

    def read_braced(self) -> str:
        """讀取 {…}，回傳內容；略過字串字面值內的括號."""
        if not self.peek("{"):
            raise self.error("expected '{'")
        depth = 0
        quote: Optional[str] = None
        start = self.pos + 1
        while self.pos < len(self.src):
            ch = self.src[self.pos]
            if quote:
                if ch == "\\":
                    self.pos += 1
                elif ch == quote:
                    quote = None
            elif ch in "\"'`":
                quote = ch
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    self.pos += 1
                    return self.src[start:self.pos - 1]
            self.pos += 1
        raise self.error("unterminated '{'")

    def read_quoted(self) -> str:
        quote = self.src[self.pos]
        end = self.src.find(quote, self.pos + 1)
        if end < 0:
            raise self.error("unterminated string")
        value = self.src[self.pos + 1:end]
        self.pos = end + 1
        return value

    def parse_element(self) -> Element:
        if not self.peek("<"):
            raise self.error("expected '<'")
        self.pos += 1
        tag = self.read_name()
        attrs: dict = {}
        while True:
            self.skip_ws()
            if self.peek("/>"):
                self.pos += 2
                return Element(tag, attrs)
            if self.peek(">"):
                self.pos += 1
                break
            if self.pos >= len(self.src):
                raise self.error(f"unterminated <{tag}>")
            name = self.read_name()
            self.skip_ws()
            if not self.peek("="):
                attrs[name] = None
                continue
            self.pos += 1
            self.skip_ws()
            if self.peek("{"):
                attrs[name] = Expr(self.read_braced().strip())
            elif self.pos < len(self.src) and self.src[self.pos] in "\"'":
                attrs[name] = self.read_quoted()
            else:
                raise self.error(f"bad value for attribute '{name}'")

        children = self.parse_children(tag)
        return Element(tag, attrs, children)

    def parse_children(self, tag: str) -> list:
        children: list = []
        while True:
            if self.pos >= len(self.src):
                raise self.error(f"missing </{tag}>")
            if self.peek("</"):
                self.pos += 2
                closing = self.read_name()
                self.skip_ws()
                if closing != tag or not self.peek(">"):
                    raise self.error(f"expected </{tag}>")
                self.pos += 1
                return children
            if self.peek("<"):
                children.append(self.parse_element())
            elif self.peek("{"):
                children.append(Expr(self.read_braced().strip()))
            else:
                start = self.pos
                while self.pos < len(self.src) and self.src[self.pos] not in "<{":
                    self.pos += 1
                text = " ".join(self.src[start:self.pos].split())
                if text:
                    children.append(text)


def parse(markup: str) -> Element:
    """解析單一根節點的 JSX 字串."""
    parser = _Parser(markup)
    parser.skip_ws()
    root = parser.parse_element()
    parser.skip_ws()
    if parser.pos != len(markup):
        raise parser.error("unexpected trailing content")
    return root
