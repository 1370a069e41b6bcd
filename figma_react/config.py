"""設定檔載入與基本驗證."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from .formatter import FORMATTERS

DEFAULT_CONFIG_PATH = "figma-react.config.json"
TOKEN_ENV_VARS = ("FIGMA_API_TOKEN", "FIGMA_TOKEN")

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"figma", "export"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "figma": {"personalAccessToken", "fileKey", "timeout"},
    "export": {"outputDir", "formatter", "extension"},
}

_VALID_EXTENSIONS = {".tsx", ".jsx"}


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    # 頂層未知欄位
    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    # 各區塊欄位
    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"[{section}] 應為 JSON 物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    export = cfg.get("export", {}) if isinstance(cfg.get("export"), dict) else {}
    formatter = export.get("formatter")
    if formatter and formatter not in FORMATTERS:
        valid = ", ".join(FORMATTERS)
        _warn(f"export.formatter '{formatter}' 不在已知值中（{valid}）")

    extension = export.get("extension")
    if extension and extension not in _VALID_EXTENSIONS:
        valid = ", ".join(sorted(_VALID_EXTENSIONS))
        _warn(f"export.extension '{extension}' 不在已知值中（{valid}）")

    figma = cfg.get("figma", {}) if isinstance(cfg.get("figma"), dict) else {}
    timeout = figma.get("timeout")
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float))):
        _warn(f"figma.timeout 應為數字，目前是 {type(timeout).__name__}")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def resolve_token(cfg: dict) -> Optional[str]:
    """Token 來源順序：config → FIGMA_API_TOKEN → FIGMA_TOKEN."""
    figma_cfg = cfg.get("figma", {}) if isinstance(cfg.get("figma"), dict) else {}
    token = figma_cfg.get("personalAccessToken")
    if token:
        return token
    for var in TOKEN_ENV_VARS:
        if os.environ.get(var):
            return os.environ[var]
    return None


def export_settings(cfg: dict) -> dict:
    export = cfg.get("export", {}) if isinstance(cfg.get("export"), dict) else {}
    return {
        "outputDir": export.get("outputDir", "./components"),
        "formatter": export.get("formatter", "builtin"),
        "extension": export.get("extension", ".tsx"),
    }
