"""
命名工具 — Figma 圖層名稱 → 合法的 React 識別字

圖層名稱是自由文字，在當作元件名、prop 名或 class 之前一律先經過這裡。
"""

import re

_WORD_SPLIT = re.compile(r"[\W_]+")

# JS / TS 保留字，不能當作解構參數名
RESERVED_WORDS = frozenset((
    "break", "case", "catch", "class", "const", "continue", "debugger", "default",
    "delete", "do", "else", "enum", "export", "extends", "false", "finally", "for",
    "function", "if", "implements", "import", "in", "instanceof", "interface", "let",
    "new", "null", "package", "private", "protected", "public", "return", "static",
    "super", "switch", "this", "throw", "true", "try", "typeof", "var", "void",
    "while", "with", "yield", "await", "arguments", "eval",
))


def _words(name: str) -> list:
    if not isinstance(name, str):
        return []
    return [w for w in _WORD_SPLIT.split(name) if w]


def to_component_name(name: str) -> str:
    """圖層名稱 → PascalCase 元件名（例：'submit button' → 'SubmitButton'）."""
    words = _words(name)
    if not words:
        return "Unnamed"
    # 只調整首字母，保留已是 PascalCase 的內部大寫
    pascal = "".join(w[:1].upper() + w[1:] for w in words)
    if pascal[0].isdigit():
        return f"Component{pascal}"
    return pascal


def to_prop_name(name: str) -> str:
    """圖層名稱 → camelCase prop 名；無法產生合法識別字時回傳空字串."""
    words = _words(name)
    if not words:
        return ""
    camel = words[0].lower() + "".join(w.capitalize() for w in words[1:])
    # JS 識別字不能以數字開頭
    while camel and camel[0].isdigit():
        camel = camel[1:]
    camel = camel[:1].lower() + camel[1:]
    if camel in RESERVED_WORDS:
        return camel + "Text"
    return camel


def to_kebab(name: str) -> str:
    out = []
    for ch in name if isinstance(name, str) else "":
        if ch.isalnum():
            out.append(ch.lower())
        else:
            out.append("-")
    slug = "".join(out).strip("-")
    while "--" in slug:
        slug = slug.replace("--", "-")
    return slug or "unnamed"


def preview_tree(node: dict, indent: int = 0) -> str:
    """除錯用：印出 Figma 節點樹與每個節點的分類結果."""
    from .classifier import classify

    lines = []
    prefix = "  " * indent
    name = node.get("name", "???")
    ftype = node.get("type", "?")
    role = classify(node)
    label = f"{prefix}├─ {name}  [{ftype}]"
    if role.value != "plain":
        label += f"  <{role.value}>"
    lines.append(label)
    for child in node.get("children", []) or []:
        if isinstance(child, dict):
            lines.append(preview_tree(child, indent + 1))
    return "\n".join(lines)
