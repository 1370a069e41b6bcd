"""
figma-react — Figma 設計節點 → React + Tailwind 元件

讀取 Figma REST API（或本機 JSON），將節點樹翻譯為帶 Tailwind class 的 TSX 元件，
並補上基本無障礙屬性（heading、alt、role、label）。
"""

__version__ = "0.1.0"

from .errors import FigmaReactError, UpstreamFetchError, FormattingError, MissingNodeError
from .style_mapper import map_styles, closest_color, figma_color_to_hex
from .classifier import NodeRole, PropertyDeclaration, classify, extract_props
from .translator import TranslationResult, translate
from .accessibility import enhance, enhance_element
from .generator import ComponentGenerator, GeneratedComponent
from .figma_client import FigmaAPIClient, find_components
from .tools import FigmaReactTools, ToolResult
from .config import load_config, validate_config

__all__ = [
    "__version__",
    "FigmaReactError",
    "UpstreamFetchError",
    "FormattingError",
    "MissingNodeError",
    "map_styles",
    "closest_color",
    "figma_color_to_hex",
    "NodeRole",
    "PropertyDeclaration",
    "classify",
    "extract_props",
    "TranslationResult",
    "translate",
    "enhance",
    "enhance_element",
    "ComponentGenerator",
    "GeneratedComponent",
    "FigmaAPIClient",
    "find_components",
    "FigmaReactTools",
    "ToolResult",
    "load_config",
    "validate_config",
]
