"""
Tool-style 操作 — 給外部 dispatch 層（CLI、agent tool 等）呼叫

每個操作都回傳 ToolResult：成功時 content 為文字（多半是 JSON），
失敗時 is_error=True 且 content 為人類可讀的錯誤訊息，不往外拋例外。
"""

import json
import logging
from dataclasses import dataclass
from typing import Optional

from .errors import FigmaReactError, MissingNodeError
from .figma_client import find_components, node_documents
from .generator import ComponentGenerator
from .writer import write_components, write_manifest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    content: str
    is_error: bool = False

    def to_dict(self) -> dict:
        return {
            "isError": self.is_error,
            "content": [{"type": "text", "text": self.content}],
        }

    def json(self):
        """成功結果的 JSON 內容."""
        return json.loads(self.content)


def _ok(payload) -> ToolResult:
    if isinstance(payload, str):
        return ToolResult(payload)
    return ToolResult(json.dumps(payload, indent=2, ensure_ascii=False))


def _fail(prefix: str, error: Exception) -> ToolResult:
    return ToolResult(f"{prefix}: {error}", is_error=True)


def lookup_node(documents: dict, node_id: str) -> dict:
    document = documents.get(node_id)
    if document is None:
        raise MissingNodeError(node_id)
    return document


class FigmaReactTools:
    """包裝 FigmaAPIClient + ComponentGenerator 的高階操作."""

    def __init__(self, client, generator: Optional[ComponentGenerator] = None, extension: str = ".tsx"):
        self.client = client
        self.generator = generator or ComponentGenerator()
        self.extension = extension

    # ─── Figma 資料 ─────────────────────────────────────────────────────────

    def get_figma_project(self, file_key: str) -> ToolResult:
        try:
            data = self.client.get_file(file_key)
        except FigmaReactError as e:
            return _fail("Failed to get Figma project", e)
        return _ok({
            "name": data.get("name"),
            "documentId": data.get("document", {}).get("id"),
            "lastModified": data.get("lastModified"),
            "version": data.get("version"),
            "componentCount": len(data.get("components") or {}),
            "styleCount": len(data.get("styles") or {}),
        })

    def get_figma_component_nodes(self, file_key: str, node_ids: list) -> ToolResult:
        try:
            data = self.client.get_file_nodes(file_key, node_ids)
        except FigmaReactError as e:
            return _fail("Failed to get Figma component nodes", e)
        return _ok(data["nodes"])

    def extract_figma_components(self, file_key: str) -> ToolResult:
        try:
            data = self.client.get_file(file_key)
        except FigmaReactError as e:
            return _fail("Failed to extract Figma components", e)
        return _ok({"components": find_components(data["document"])})

    def get_figma_component_sets(self, file_key: str) -> ToolResult:
        try:
            data = self.client.get_component_sets(file_key)
        except FigmaReactError as e:
            return _fail("Failed to get Figma component sets", e)
        return _ok(data)

    def get_figma_images(self, file_key: str, node_ids: list, format: str = "png", scale: int = 2) -> ToolResult:
        """節點 → 匯出圖片 URL；Figma 無法渲染的節點值為 null."""
        try:
            images = self.client.get_images(file_key, node_ids, format=format, scale=scale)
        except FigmaReactError as e:
            return _fail("Failed to get Figma images", e)
        return _ok({"images": images})

    # ─── 產生元件 ────────────────────────────────────────────────────────────

    def generate_react_component(self, component_name: str, node_id: str, file_key: str) -> ToolResult:
        try:
            data = self.client.get_file_nodes(file_key, [node_id])
            node = lookup_node(node_documents(data), node_id)
        except MissingNodeError as e:
            return ToolResult(str(e), is_error=True)
        except FigmaReactError as e:
            return _fail("Failed to generate React component", e)
        return _ok(self.generator.generate_react_component(component_name, node))

    def _collect(self, documents: dict, components: list) -> tuple:
        pairs, missing = [], []
        for comp in components:
            try:
                pairs.append((comp["name"], lookup_node(documents, comp["id"])))
            except MissingNodeError as e:
                logger.info("skipping %s: %s", comp["name"], e)
                missing.append(e.node_id)
        return pairs, missing

    def generate_component_library(self, components: list, file_key: str) -> ToolResult:
        """components: [{"name": ..., "nodeId": ...}]；缺少的節點略過並列在 missing."""
        requested = [{"name": c["name"], "id": c["nodeId"]} for c in components]
        try:
            data = self.client.get_file_nodes(file_key, [c["id"] for c in requested])
        except FigmaReactError as e:
            return _fail("Failed to generate component library", e)

        pairs, missing = self._collect(node_documents(data), requested)
        library = self.generator.generate_component_library(pairs)
        return _ok({
            "components": [{"name": name, "code": code} for name, code in library.items()],
            "requested": len(requested),
            "generated": len(library),
            "missing": missing,
        })

    # ─── 輸出 ───────────────────────────────────────────────────────────────

    def write_components_to_files(self, components: list, output_dir: str) -> ToolResult:
        try:
            results = write_components(output_dir, components, self.extension)
        except OSError as e:
            return _fail("Failed to write components to files", e)
        return _ok({"results": results})

    def figma_to_react_workflow(self, file_key: str, output_dir: str) -> ToolResult:
        """抓取檔案內所有元件 → 產生 → 寫檔，回傳 manifest."""
        try:
            file_data = self.client.get_file(file_key)
            found = find_components(file_data["document"])
            documents = {}
            if found:
                nodes = self.client.get_file_nodes(file_key, [c["id"] for c in found])
                documents = node_documents(nodes)
        except FigmaReactError as e:
            return _fail("Failed to execute Figma to React workflow", e)

        pairs, missing = self._collect(documents, found)
        library = self.generator.generate_component_library(pairs)
        try:
            results = write_components(output_dir, library, self.extension)
            manifest = {
                "componentsFound": len(found),
                "componentsGenerated": len(results),
                "results": results,
                "missing": missing,
            }
            manifest["manifestPath"] = write_manifest(output_dir, manifest)
        except OSError as e:
            return _fail("Failed to execute Figma to React workflow", e)
        return _ok(manifest)
