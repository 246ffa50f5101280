from __future__ import annotations

# sqlite_webgui/config.py
import os
from dataclasses import dataclass

import yaml

# 配置解析顺序（高 -> 低）：
# 1) 命令行参数（由 cli.py 传入 overrides）
# 2) 环境变量 SQLITE_WEBGUI_*
# 3) config.yaml（--config / SQLITE_WEBGUI_CONFIG / 当前目录）
# 4) 默认值
ENV_PREFIX = "SQLITE_WEBGUI_"
DEFAULT_CONFIG_FILE = "config.yaml"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Settings:
    db_path: str | None = None
    port: int = 8080
    host: str = "127.0.0.1"
    writable: bool = False
    open_browser: bool = True
    foreign_keys: bool = False
    log_level: str = "INFO"

    @property
    def readonly(self) -> bool:
        return not self.writable


def _to_bool(v, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    return default


def _to_int(v, default: int) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def read_config_yaml(path: str | None = None) -> dict:
    """Read config.yaml; a missing or unparsable file yields an empty dict."""
    cfg_path = path or os.environ.get(ENV_PREFIX + "CONFIG") or DEFAULT_CONFIG_FILE
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(cfg, dict):
        return {}
    return cfg


def _read_env() -> dict:
    out = {}
    for key in ("port", "host", "writable", "open_browser", "foreign_keys", "log_level", "db_path"):
        v = os.environ.get(ENV_PREFIX + key.upper())
        if v is not None and v.strip():
            out[key] = v.strip()
    return out


def load_settings(config_path: str | None = None, **overrides) -> Settings:
    """
    合并 config.yaml / 环境变量 / 显式参数，得到最终 Settings。
    overrides 中值为 None 的键视为未指定。
    """
    merged: dict = {}
    merged.update(read_config_yaml(config_path))
    merged.update(_read_env())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    base = Settings()
    db_path = merged.get("db_path")
    return Settings(
        db_path=str(db_path).strip() if isinstance(db_path, str) and db_path.strip() else base.db_path,
        port=_to_int(merged.get("port"), base.port),
        host=str(merged.get("host") or base.host),
        writable=_to_bool(merged.get("writable"), base.writable),
        open_browser=_to_bool(merged.get("open_browser"), base.open_browser),
        foreign_keys=_to_bool(merged.get("foreign_keys"), base.foreign_keys),
        log_level=str(merged.get("log_level") or base.log_level).upper(),
    )
