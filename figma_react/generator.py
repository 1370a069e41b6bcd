"""
Generator — Figma 節點 → React (TSX) 元件原始碼

流程固定為 translate → enhance → assemble 三步，各自獨立。
格式化失敗不影響產生，只記錄警告並回傳未格式化的原始碼。
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from .accessibility import enhance_element
from .classifier import dedupe_props
from .errors import FormattingError
from .formatter import format_source
from .markup import Element, render
from .naming import to_component_name
from .translator import TranslationResult, translate

logger = logging.getLogger(__name__)

# return ( 內 JSX 的縮排層級（兩格一層）
_BODY_DEPTH = 2


@dataclass(frozen=True)
class GeneratedComponent:
    name: str
    source_code: str


def _doc_comment(text: str) -> str:
    return text.replace("*/", "* /")


def _interface(name: str, props: list) -> str:
    lines = [f"interface {name}Props {{"]
    for prop in props:
        optional = "?" if prop.is_optional else ""
        if prop.description:
            lines.append(f"  /** {_doc_comment(prop.description)} */")
        lines.append(f"  {prop.name}{optional}: {prop.type};")
    lines.append("}")
    return "\n".join(lines)


def _destructure(props: list) -> str:
    parts = []
    for prop in props:
        if prop.default_value is not None:
            parts.append(f"{prop.name} = {prop.default_value}")
        else:
            parts.append(prop.name)
    if not parts:
        return "{}"
    return "{ " + ", ".join(parts) + " }"


def assemble(component_name: str, translation: TranslationResult, enhanced: Element) -> str:
    """組出未格式化的元件原始碼."""
    props = dedupe_props(translation.properties)
    imports = list(dict.fromkeys(translation.imports))
    header = "\n".join(["import React from 'react';"] + imports)
    jsx = render(enhanced, _BODY_DEPTH)
    return (
        f"{header}\n\n"
        f"{_interface(component_name, props)}\n\n"
        f"export const {component_name} = ({_destructure(props)}: {component_name}Props) => {{\n"
        f"  return (\n"
        f"    {jsx}\n"
        f"  );\n"
        f"}};\n"
    )


class ComponentGenerator:
    """Figma 節點 → React 元件（單一元件或整批元件庫）."""

    def __init__(self, formatter: str = "builtin"):
        self.formatter = formatter

    def _format(self, name: str, code: str) -> str:
        try:
            return format_source(code, self.formatter)
        except FormattingError as e:
            logger.warning("Error formatting component %s, using unformatted source: %s", name, e)
            return code

    def generate_component(self, component_name: str, node: dict) -> GeneratedComponent:
        name = to_component_name(component_name)
        translation = translate(node)
        enhanced = enhance_element(translation.element, node)
        code = assemble(name, translation, enhanced)
        return GeneratedComponent(name=name, source_code=self._format(name, code))

    def generate_react_component(self, component_name: str, node: dict) -> str:
        return self.generate_component(component_name, node).source_code

    def generate_component_library(self, components: Iterable[Tuple[str, dict]]) -> Dict[str, str]:
        """[(名稱, 節點)] → {PascalCase 名稱: 原始碼}；同名時後者覆蓋前者."""
        library: Dict[str, str] = {}
        for name, node in components:
            generated = self.generate_component(name, node)
            if generated.name in library:
                logger.info("generate_component_library: %s generated twice, keeping the later one", generated.name)
            library[generated.name] = generated.source_code
        return library
