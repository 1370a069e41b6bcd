"""
Output — 將產生的元件寫成檔案（每個元件一個檔）與 manifest
"""

import json
import os
from datetime import datetime, timezone
from pathlib import Path

MANIFEST_NAME = "figma-react-manifest.json"


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def write_component(output_dir: str, name: str, code: str, extension: str = ".tsx") -> str:
    path = Path(output_dir) / f"{name}{extension}"
    _write(path, code)
    return str(path)


def write_components(output_dir: str, components, extension: str = ".tsx") -> list:
    """components 可為 {name: code} 或 [{name, code}]；回傳 [{name, path}]."""
    if isinstance(components, dict):
        items = list(components.items())
    else:
        items = [(c["name"], c["code"]) for c in components]
    results = []
    for name, code in items:
        results.append({"name": name, "path": write_component(output_dir, name, code, extension)})
    return results


def write_manifest(output_dir: str, manifest: dict) -> str:
    """在 output_dir 寫入 figma-react-manifest.json."""
    payload = dict(manifest)
    payload["generatedAt"] = datetime.now(timezone.utc).isoformat()
    path = os.path.join(output_dir, MANIFEST_NAME)
    os.makedirs(output_dir, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    return path
