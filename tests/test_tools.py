"""
FigmaReactTools 測試：以假 client 取代 Figma API
涵蓋缺少節點、上游錯誤、寫檔與 workflow manifest。
"""
import json

import pytest
from figma_react.errors import MissingNodeError, UpstreamFetchError
from figma_react.tools import FigmaReactTools, ToolResult, lookup_node
from figma_react.writer import MANIFEST_NAME


def component(node_id, name):
    return {
        "id": node_id,
        "type": "COMPONENT",
        "name": name,
        "children": [{"type": "TEXT", "name": "Label", "characters": name}],
    }


class FakeClient:
    """get_file_nodes 只回傳 available 中有的節點，其餘為 null."""

    def __init__(self, available, document=None, error=None):
        self.available = available
        self.document = document or {"id": "0:0", "type": "DOCUMENT", "children": []}
        self.error = error
        self.node_requests = []
        self.image_requests = []

    def _maybe_fail(self):
        if self.error:
            raise self.error

    def get_file(self, file_key):
        self._maybe_fail()
        return {
            "name": "Design Kit",
            "lastModified": "2024-01-01T00:00:00Z",
            "version": "42",
            "document": self.document,
            "components": {"1:1": {}, "1:2": {}},
            "styles": {},
        }

    def get_file_nodes(self, file_key, node_ids):
        self._maybe_fail()
        self.node_requests.append(list(node_ids))
        nodes = {}
        for node_id in node_ids:
            if node_id in self.available:
                nodes[node_id] = {"document": self.available[node_id]}
            else:
                nodes[node_id] = None
        return {"nodes": nodes}

    def get_component_sets(self, file_key):
        self._maybe_fail()
        return {"meta": {"component_sets": [{"key": "abc", "name": "Buttons"}]}}

    def get_images(self, file_key, node_ids, format="png", scale=2):
        self._maybe_fail()
        self.image_requests.append((list(node_ids), format, scale))
        return {node_id: (f"https://img.example/{node_id}.{format}" if node_id in self.available else None)
                for node_id in node_ids}


AVAILABLE = {
    "1:1": component("1:1", "Primary Button"),
    "1:2": component("1:2", "Card"),
}


# ─── ToolResult ─────────────────────────────────────────────────────────────

def test_tool_result_dict():
    assert ToolResult("hi").to_dict() == {"isError": False, "content": [{"type": "text", "text": "hi"}]}
    assert ToolResult("bad", is_error=True).to_dict()["isError"] is True


def test_lookup_node_missing():
    with pytest.raises(MissingNodeError) as exc:
        lookup_node({"1:1": None}, "1:1")
    assert exc.value.node_id == "1:1"
    assert str(exc.value) == "Figma node with ID 1:1 not found"


# ─── Figma 資料 ─────────────────────────────────────────────────────────────

def test_get_figma_project_summary():
    result = FigmaReactTools(FakeClient(AVAILABLE)).get_figma_project("KEY")
    assert not result.is_error
    summary = result.json()
    assert summary["name"] == "Design Kit"
    assert summary["componentCount"] == 2
    assert summary["styleCount"] == 0


def test_extract_components():
    document = {"id": "0:0", "children": [component("1:1", "Primary Button")]}
    result = FigmaReactTools(FakeClient(AVAILABLE, document)).extract_figma_components("KEY")
    assert result.json() == {"components": [{"id": "1:1", "name": "Primary Button", "type": "COMPONENT"}]}


def test_component_nodes_and_sets():
    tools = FigmaReactTools(FakeClient(AVAILABLE))
    nodes = tools.get_figma_component_nodes("KEY", ["1:1", "9:9"]).json()
    assert nodes["9:9"] is None
    assert nodes["1:1"]["document"]["name"] == "Primary Button"
    sets = tools.get_figma_component_sets("KEY").json()
    assert sets["meta"]["component_sets"][0]["name"] == "Buttons"


def test_get_figma_images():
    client = FakeClient(AVAILABLE)
    result = FigmaReactTools(client).get_figma_images("KEY", ["1:1", "9:9"], format="svg", scale=1)
    assert result.json() == {"images": {"1:1": "https://img.example/1:1.svg", "9:9": None}}
    assert client.image_requests == [(["1:1", "9:9"], "svg", 1)]


@pytest.mark.parametrize("method,args,prefix", [
    ("get_figma_project", ("KEY",), "Failed to get Figma project"),
    ("extract_figma_components", ("KEY",), "Failed to extract Figma components"),
    ("get_figma_component_sets", ("KEY",), "Failed to get Figma component sets"),
    ("get_figma_component_nodes", ("KEY", ["1:1"]), "Failed to get Figma component nodes"),
    ("get_figma_images", ("KEY", ["1:1"]), "Failed to get Figma images"),
    ("generate_react_component", ("Button", "1:1", "KEY"), "Failed to generate React component"),
])
def test_upstream_errors_become_error_results(method, args, prefix):
    client = FakeClient(AVAILABLE, error=UpstreamFetchError("Figma API error: rate limit exceeded", 429))
    result = getattr(FigmaReactTools(client), method)(*args)
    assert result.is_error
    assert result.content == f"{prefix}: Figma API error: rate limit exceeded"


# ─── 產生元件 ────────────────────────────────────────────────────────────────

def test_generate_react_component():
    result = FigmaReactTools(FakeClient(AVAILABLE)).generate_react_component("primary button", "1:1", "KEY")
    assert not result.is_error
    assert "export const PrimaryButton" in result.content
    assert "onClick={onClick}" in result.content


def test_generate_react_component_missing_node():
    result = FigmaReactTools(FakeClient(AVAILABLE)).generate_react_component("Ghost", "9:9", "KEY")
    assert result.is_error
    assert result.content == "Figma node with ID 9:9 not found"


def test_library_skips_missing_node():
    client = FakeClient(AVAILABLE)
    components = [
        {"name": "Primary Button", "nodeId": "1:1"},
        {"name": "Ghost", "nodeId": "9:9"},
        {"name": "Card", "nodeId": "1:2"},
    ]
    result = FigmaReactTools(client).generate_component_library(components, "KEY")
    payload = result.json()
    assert client.node_requests == [["1:1", "9:9", "1:2"]]
    assert [c["name"] for c in payload["components"]] == ["PrimaryButton", "Card"]
    assert payload["requested"] == 3
    assert payload["generated"] == 2
    assert payload["missing"] == ["9:9"]


def test_library_upstream_error():
    client = FakeClient(AVAILABLE, error=UpstreamFetchError("boom"))
    result = FigmaReactTools(client).generate_component_library([{"name": "A", "nodeId": "1:1"}], "KEY")
    assert result.is_error
    assert result.content.startswith("Failed to generate component library")


# ─── 輸出 ───────────────────────────────────────────────────────────────────

def test_write_components_to_files(tmp_path):
    tools = FigmaReactTools(FakeClient(AVAILABLE), extension=".jsx")
    result = tools.write_components_to_files([{"name": "Card", "code": "x"}], str(tmp_path))
    assert not result.is_error
    assert (tmp_path / "Card.jsx").read_text(encoding="utf-8") == "x"
    assert result.json()["results"][0]["name"] == "Card"


def test_write_components_to_files_os_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a dir")
    result = FigmaReactTools(FakeClient(AVAILABLE)).write_components_to_files(
        [{"name": "Card", "code": "x"}], str(blocker))
    assert result.is_error
    assert result.content.startswith("Failed to write components to files")


def test_workflow_manifest_reports_mismatch(tmp_path):
    document = {"id": "0:0", "type": "DOCUMENT", "children": [{
        "id": "0:1",
        "type": "CANVAS",
        "children": [
            component("1:1", "Primary Button"),
            component("1:2", "Card"),
            component("1:3", "Deleted Badge"),
        ],
    }]}
    client = FakeClient(AVAILABLE, document)
    result = FigmaReactTools(client).figma_to_react_workflow("KEY", str(tmp_path))
    manifest = result.json()

    assert manifest["componentsFound"] == 3
    assert manifest["componentsGenerated"] == 2
    assert manifest["missing"] == ["1:3"]
    assert sorted(p.name for p in tmp_path.glob("*.tsx")) == ["Card.tsx", "PrimaryButton.tsx"]

    on_disk = json.loads((tmp_path / MANIFEST_NAME).read_text(encoding="utf-8"))
    assert on_disk["componentsGenerated"] == 2
    assert "generatedAt" in on_disk
    assert manifest["manifestPath"] == str(tmp_path / MANIFEST_NAME)


def test_workflow_without_components(tmp_path):
    client = FakeClient(AVAILABLE)
    manifest = FigmaReactTools(client).figma_to_react_workflow("KEY", str(tmp_path)).json()
    assert manifest["componentsFound"] == 0
    assert manifest["componentsGenerated"] == 0
    assert client.node_requests == []


def test_workflow_upstream_error(tmp_path):
    client = FakeClient(AVAILABLE, error=UpstreamFetchError("Figma API error: 403 Forbidden"))
    result = FigmaReactTools(client).figma_to_react_workflow("KEY", str(tmp_path))
    assert result.is_error
    assert result.content == "Failed to execute Figma to React workflow: Figma API error: 403 Forbidden"
