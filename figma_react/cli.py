#!/usr/bin/env python3
"""
figma-react CLI — Figma → React + Tailwind 元件

  figma-react project --file-key KEY                      # 檔案摘要
  figma-react components --file-key KEY                   # 列出元件
  figma-react generate --file-key KEY --node-id 1:2 --name Button
  figma-react images --file-key KEY --node-id 1:2 --format svg
  figma-react library --file-key KEY --component Button=1:2 --component Card=1:3
  figma-react workflow --file-key KEY --output ./components
  figma-react convert design.json [--output DIR]          # 本機 JSON，不連網
  figma-react watch design.json --output DIR              # 檔案變更時重新產生
"""

import argparse
import json
import logging
import os
import sys
import time

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from figma_react import __version__

from .config import export_settings, load_config, resolve_token, DEFAULT_CONFIG_PATH
from .figma_client import FigmaAPIClient, collect_component_nodes, find_node, node_documents
from .generator import ComponentGenerator
from .naming import preview_tree, to_component_name
from .tools import FigmaReactTools, ToolResult
from .writer import write_components


def _emit(result: ToolResult) -> int:
    if result.is_error:
        print(f"❌ {result.content}")
        return 1
    print(result.content)
    return 0


def _file_key(args, config: dict):
    figma_cfg = config.get("figma", {}) if isinstance(config.get("figma"), dict) else {}
    return args.file_key or figma_cfg.get("fileKey")


def _build_tools(args, config: dict):
    """回傳 (tools, file_key)；缺 token 或 file key 時印出錯誤並回傳 (None, None)."""
    token = resolve_token(config)
    if not token:
        print("❌ 請設定 FIGMA_API_TOKEN 環境變數，或在 figma-react.config.json 的 figma.personalAccessToken 設定。")
        print("   取得方式：Figma → Settings → Personal access tokens → 新增")
        return None, None
    file_key = _file_key(args, config)
    if not file_key:
        print("❌ 請使用 --file-key 或在 config 的 figma.fileKey 設定 Figma 檔案 key。")
        return None, None
    settings = export_settings(config)
    timeout = config.get("figma", {}).get("timeout", 60.0) if isinstance(config.get("figma"), dict) else 60.0
    client = FigmaAPIClient(token, timeout=timeout)
    generator = ComponentGenerator(formatter=settings["formatter"])
    return FigmaReactTools(client, generator, extension=settings["extension"]), file_key


# ─── 本機 JSON ───────────────────────────────────────────────────────────────

def load_design_nodes(path: str, node_id=None) -> list:
    """讀取本機 Figma JSON，回傳 [(name, node)]。

    接受三種格式：單一節點、/files/:key/nodes 回應、/files/:key 回應（取出所有元件）。
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"'{path}' 應為 JSON 物件")

    if isinstance(data.get("nodes"), dict):
        documents = node_documents(data)
        if node_id:
            documents = {node_id: documents.get(node_id)}
        nodes = [doc for doc in documents.values() if doc is not None]
    elif isinstance(data.get("document"), dict):
        if node_id:
            hit = find_node(data["document"], node_id)
            nodes = [hit] if hit else []
        else:
            nodes = collect_component_nodes(data["document"])
    else:
        if node_id:
            hit = find_node(data, node_id)
            nodes = [hit] if hit else []
        else:
            nodes = [data]

    if not nodes:
        target = f"node '{node_id}'" if node_id else "any component"
        raise ValueError(f"'{path}' 中找不到 {target}")
    return [(n.get("name", "Unnamed"), n) for n in nodes]


def convert_file(path: str, output_dir, config: dict, name=None, node_id=None) -> dict:
    settings = export_settings(config)
    pairs = load_design_nodes(path, node_id)
    if name and len(pairs) == 1:
        pairs = [(name, pairs[0][1])]
    generator = ComponentGenerator(formatter=settings["formatter"])
    library = generator.generate_component_library(pairs)
    if output_dir:
        write_components(output_dir, library, settings["extension"])
    return library


# ─── 子命令 ──────────────────────────────────────────────────────────────────

def cmd_project(args, config: dict) -> int:
    tools, file_key = _build_tools(args, config)
    if not tools:
        return 1
    return _emit(tools.get_figma_project(file_key))


def cmd_components(args, config: dict) -> int:
    tools, file_key = _build_tools(args, config)
    if not tools:
        return 1
    return _emit(tools.extract_figma_components(file_key))


def cmd_component_sets(args, config: dict) -> int:
    tools, file_key = _build_tools(args, config)
    if not tools:
        return 1
    return _emit(tools.get_figma_component_sets(file_key))


def cmd_nodes(args, config: dict) -> int:
    tools, file_key = _build_tools(args, config)
    if not tools:
        return 1
    return _emit(tools.get_figma_component_nodes(file_key, args.node_id))


def cmd_images(args, config: dict) -> int:
    tools, file_key = _build_tools(args, config)
    if not tools:
        return 1
    return _emit(tools.get_figma_images(file_key, args.node_id, format=args.format, scale=args.scale))


def cmd_generate(args, config: dict) -> int:
    """Generate: 單一節點 → 單一元件（可選擇寫檔）."""
    tools, file_key = _build_tools(args, config)
    if not tools:
        return 1
    print(f"📥 Fetching node {args.node_id} from Figma: {file_key}", file=sys.stderr)
    result = tools.generate_react_component(args.name, args.node_id, file_key)
    if result.is_error or not args.output:
        return _emit(result)
    name = to_component_name(args.name)
    written = tools.write_components_to_files([{"name": name, "code": result.content}], args.output)
    if written.is_error:
        return _emit(written)
    print(f"✅ Generated {name} to {args.output}")
    return 0


def _parse_component_args(values: list) -> list:
    components = []
    for value in values:
        name, sep, node_id = value.partition("=")
        if not sep or not name or not node_id:
            raise ValueError(f"--component 格式應為 Name=nodeId，收到 '{value}'")
        components.append({"name": name, "nodeId": node_id})
    return components


def cmd_library(args, config: dict) -> int:
    """Library: 多個 Name=nodeId → 元件庫."""
    try:
        components = _parse_component_args(args.component)
    except ValueError as e:
        print(f"❌ {e}")
        return 1
    tools, file_key = _build_tools(args, config)
    if not tools:
        return 1
    result = tools.generate_component_library(components, file_key)
    if result.is_error or not args.output:
        return _emit(result)

    payload = result.json()
    written = tools.write_components_to_files(payload["components"], args.output)
    if written.is_error:
        return _emit(written)
    print(f"✅ Generated {payload['generated']}/{payload['requested']} components to {args.output}")
    for node_id in payload["missing"]:
        print(f"   ⚠️  Node {node_id} not found, skipped")
    return 0


def cmd_workflow(args, config: dict) -> int:
    """Workflow: 抓取所有元件 → 產生 → 寫檔."""
    tools, file_key = _build_tools(args, config)
    if not tools:
        return 1
    output_dir = args.output or export_settings(config)["outputDir"]
    print(f"🚀 Figma → React: {file_key} → {output_dir}", file=sys.stderr)
    return _emit(tools.figma_to_react_workflow(file_key, output_dir))


def cmd_convert(args, config: dict) -> int:
    """Convert: 本機 Figma JSON → 元件（不需要 token）."""
    try:
        library = convert_file(args.design, args.output, config, args.name, args.node_id)
    except (OSError, ValueError) as e:
        print(f"❌ Convert failed: {e}")
        return 1
    if args.output:
        print(f"✅ Generated {len(library)} components to {args.output}")
        return 0
    for code in library.values():
        print(code)
    return 0


def cmd_preview(args, config: dict) -> int:
    try:
        pairs = load_design_nodes(args.design, args.node_id)
    except (OSError, ValueError) as e:
        print(f"❌ Preview failed: {e}")
        return 1
    for _, node in pairs:
        print(preview_tree(node))
    return 0


class ChangeHandler(FileSystemEventHandler):
    """監看單一設計 JSON，變更時（含防抖）呼叫 callback."""

    def __init__(self, callback, target: str, debounce: float = 1.0):
        self.callback = callback
        self.target = os.path.abspath(target)
        self.debounce = debounce
        self.last_trigger = 0.0

    def on_modified(self, event):
        if event.is_directory:
            return
        if os.path.abspath(event.src_path) != self.target:
            return
        now = time.time()
        if now - self.last_trigger < self.debounce:
            return
        self.last_trigger = now
        print(f"\n🔄 File changed: {event.src_path}")
        self.callback()

    def on_created(self, event):
        self.on_modified(event)


def cmd_watch(args, config: dict) -> int:
    design = os.path.abspath(args.design)
    output_dir = args.output or export_settings(config)["outputDir"]

    def regenerate():
        try:
            library = convert_file(design, output_dir, config, args.name, args.node_id)
        except (OSError, ValueError) as e:
            print(f"   ⚠️  Regenerate failed: {e}")
            return
        print(f"   ✅ Generated {len(library)} components to {output_dir}")

    print(f"👀 Watching '{design}'...")
    print(f"   Output: {output_dir}")
    print("   Press Ctrl+C to stop.")
    regenerate()

    handler = ChangeHandler(regenerate, design)
    observer = Observer()
    observer.schedule(handler, os.path.dirname(design), recursive=False)
    observer.start()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\n👋 Stopping watch...")
    finally:
        observer.stop()
        observer.join()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="figma-react",
        description="figma-react: Figma → React + Tailwind components",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--verbose", action="store_true", help="Log INFO messages to stderr")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    for cmd, help_text in (
        ("project", "Show Figma file summary"),
        ("components", "List COMPONENT / COMPONENT_SET nodes"),
        ("component-sets", "Show component sets"),
    ):
        p = sub.add_parser(cmd, help=help_text)
        p.add_argument("--file-key", help="Figma file key")

    nodes_p = sub.add_parser("nodes", help="Fetch raw node JSON")
    nodes_p.add_argument("--file-key", help="Figma file key")
    nodes_p.add_argument("--node-id", action="append", required=True, help="Node ID (repeatable)")

    img_p = sub.add_parser("images", help="Export node render URLs")
    img_p.add_argument("--file-key", help="Figma file key")
    img_p.add_argument("--node-id", action="append", required=True, help="Node ID (repeatable)")
    img_p.add_argument("--format", choices=["png", "jpg", "svg", "pdf"], default="png", help="Image format")
    img_p.add_argument("--scale", type=float, default=2, help="Render scale (0.01–4)")

    gen_p = sub.add_parser("generate", help="Figma node → React component",
        epilog="Examples:\n  figma-react generate --file-key ABC123 --node-id 1:2 --name SubmitButton --output ./src/components",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    gen_p.add_argument("--file-key", help="Figma file key")
    gen_p.add_argument("--node-id", required=True, help="Figma node ID")
    gen_p.add_argument("--name", required=True, help="Component name")
    gen_p.add_argument("--output", help="Output directory (prints to stdout if omitted)")

    lib_p = sub.add_parser("library", help="Several Figma nodes → component library",
        epilog="Examples:\n  figma-react library --file-key ABC123 --component Button=1:2 --component Card=1:3 --output ./out",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    lib_p.add_argument("--file-key", help="Figma file key")
    lib_p.add_argument("--component", action="append", required=True, help="Name=nodeId (repeatable)")
    lib_p.add_argument("--output", help="Output directory (prints JSON if omitted)")

    wf_p = sub.add_parser("workflow", help="All components in a file → files + manifest")
    wf_p.add_argument("--file-key", help="Figma file key")
    wf_p.add_argument("--output", help="Output directory")

    for cmd, help_text in (
        ("convert", "Local Figma JSON → React components"),
        ("preview", "Preview node tree with classification"),
        ("watch", "Watch a local Figma JSON and regenerate on change"),
    ):
        p = sub.add_parser(cmd, help=help_text)
        p.add_argument("design", help="Path to a Figma node / file JSON")
        p.add_argument("--node-id", help="Pick a single node by ID")
        if cmd != "preview":
            p.add_argument("--name", help="Component name (single node only)")
            p.add_argument("--output", help="Output directory")

    return parser


_COMMANDS = {
    "project": cmd_project,
    "components": cmd_components,
    "component-sets": cmd_component_sets,
    "nodes": cmd_nodes,
    "images": cmd_images,
    "generate": cmd_generate,
    "library": cmd_library,
    "workflow": cmd_workflow,
    "convert": cmd_convert,
    "preview": cmd_preview,
    "watch": cmd_watch,
}


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    config = load_config(args.config)

    handler = _COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args, config)


if __name__ == "__main__":
    sys.exit(main())
