"""
Figma REST API 讀取

唯讀封裝：檔案、指定節點、圖片、component sets。
所有失敗（連線、HTTP 錯誤、格式不符）一律轉成 UpstreamFetchError，不重試。
"""

import logging
from typing import Optional

import requests

from .errors import UpstreamFetchError

logger = logging.getLogger(__name__)

COMPONENT_TYPES = ("COMPONENT", "COMPONENT_SET")


class FigmaAPIClient:
    """Figma REST API 唯讀封裝."""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(self, token: str, timeout: float = 60.0, session: Optional[requests.Session] = None):
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "X-Figma-Token": token,
            "Content-Type": "application/json",
        })

    def _get(self, path: str, params: Optional[dict] = None) -> dict:
        url = f"{self.BASE_URL}{path}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as e:
            raise UpstreamFetchError(f"Figma API timeout: {path}") from e
        except requests.RequestException as e:
            raise UpstreamFetchError(f"Figma API connection error: {path}: {e}") from e

        if resp.status_code == 403:
            raise UpstreamFetchError(
                "Figma API error: 403 Forbidden, token is invalid or expired", status=403)
        if resp.status_code == 404:
            raise UpstreamFetchError(f"Figma API error: resource not found: {path}", status=404)
        if resp.status_code == 429:
            raise UpstreamFetchError("Figma API error: rate limit exceeded", status=429)
        if resp.status_code != 200:
            raise UpstreamFetchError(
                f"Figma API error {resp.status_code}: {_error_message(resp)}", status=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamFetchError(f"Figma API returned a non-JSON body: {path}") from e
        if not isinstance(data, dict):
            raise UpstreamFetchError(f"Figma API returned an unexpected payload: {path}")
        return data

    def get_file(self, file_key: str) -> dict:
        data = self._get(f"/files/{file_key}")
        if not isinstance(data.get("document"), dict):
            raise UpstreamFetchError(f"Figma file '{file_key}' has no document")
        return data

    def get_file_nodes(self, file_key: str, node_ids: list) -> dict:
        data = self._get(f"/files/{file_key}/nodes", params={"ids": ",".join(node_ids)})
        if not isinstance(data.get("nodes"), dict):
            raise UpstreamFetchError(f"Figma nodes response for '{file_key}' has no 'nodes' mapping")
        logger.info("get_file_nodes: file=%s, requested=%d", file_key, len(node_ids))
        return data

    def get_images(self, file_key: str, node_ids: list, format: str = "png", scale: int = 2) -> dict:
        data = self._get(
            f"/images/{file_key}",
            params={"ids": ",".join(node_ids), "format": format, "scale": scale},
        )
        return data.get("images") or {}

    def get_component_sets(self, file_key: str) -> dict:
        return self._get(f"/files/{file_key}/component_sets")


def _error_message(resp) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, dict):
        return str(body.get("err") or body.get("message") or body)[:200]
    return str(body)[:200]


def collect_component_nodes(node: dict) -> list:
    """前序走訪文件樹，回傳所有 COMPONENT / COMPONENT_SET 節點本身."""
    found = []
    if not isinstance(node, dict):
        return found
    if node.get("type") in COMPONENT_TYPES:
        found.append(node)
    for child in node.get("children", []) or []:
        found.extend(collect_component_nodes(child))
    return found


def find_components(document: dict) -> list:
    """文件內所有元件的摘要 [{id, name, type}]，依文件順序."""
    return [
        {"id": n.get("id"), "name": n.get("name", ""), "type": n.get("type")}
        for n in collect_component_nodes(document)
    ]


def find_node(node: dict, node_id: str) -> Optional[dict]:
    if not isinstance(node, dict):
        return None
    if node.get("id") == node_id:
        return node
    for child in node.get("children", []) or []:
        hit = find_node(child, node_id)
        if hit is not None:
            return hit
    return None


def node_documents(nodes_payload: dict) -> dict:
    """/files/:key/nodes 回應 → {node_id: document 或 None}."""
    nodes = nodes_payload.get("nodes") if isinstance(nodes_payload, dict) else None
    documents = {}
    for node_id, entry in (nodes or {}).items():
        document = entry.get("document") if isinstance(entry, dict) else None
        documents[node_id] = document if isinstance(document, dict) else None
    return documents
