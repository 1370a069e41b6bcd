"""figma_react 例外類別."""

from typing import Optional


class FigmaReactError(Exception):
    """套件內所有例外的基底類別."""


class UpstreamFetchError(FigmaReactError):
    """Figma API 呼叫失敗，或回傳格式無法辨識。不在套件內重試。"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class FormattingError(FigmaReactError):
    """原始碼格式化失敗；產生器會退回未格式化的原始碼."""


class MissingNodeError(FigmaReactError):
    """指定的 node id 不在 Figma 回傳結果中."""

    def __init__(self, node_id: str):
        super().__init__(f"Figma node with ID {node_id} not found")
        self.node_id = node_id
