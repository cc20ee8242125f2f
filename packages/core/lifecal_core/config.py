"""Persistent app settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from lifecal_renderer.devices import DEFAULT_DEVICE_ID, DEVICES
from lifecal_renderer.themes import DEFAULT_THEME_NAME, THEMES

CONFIG_VERSION = 2
CALENDAR_TYPES = ("year", "life", "goal")
MAX_LIFE_EXPECTANCY = 150

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass
class WallpaperConfig:
    calendar_type: str = "year"
    device: str = DEFAULT_DEVICE_ID
    accent: str = "#ff6b6b"
    theme: str = DEFAULT_THEME_NAME


@dataclass
class LifeConfig:
    birth_date: str = "1990-01-01"
    expectancy: int = 80


@dataclass
class GoalConfig:
    target_date: str | None = None
    title: str = "Goal"
    start_date: str | None = None


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8787
    cache_max_age: int = 3600


@dataclass
class ExportConfig:
    output_dir: str | None = None
    preview_scale: float = 0.25


@dataclass
class LoggingConfig:
    keep_log_files: int = 7


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    wallpaper: WallpaperConfig = field(default_factory=WallpaperConfig)
    life: LifeConfig = field(default_factory=LifeConfig)
    goal: GoalConfig = field(default_factory=GoalConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "LifeCal"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "LifeCal"
    return Path.home() / ".config" / "lifecal"


def config_path() -> Path:
    override = os.environ.get("LIFECAL_CONFIG", "").strip()
    if override:
        return Path(override).expanduser()
    return config_root() / "config.json"


def normalize_accent(value: str | None, default: str = "#ff6b6b") -> str:
    if not value or not _HEX_RE.match(value.strip()):
        return default
    return "#" + value.strip().lstrip("#").lower()


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in (raw or {}).items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_wallpaper(cfg: AppConfig) -> None:
    wp = cfg.wallpaper
    if wp.calendar_type not in CALENDAR_TYPES:
        wp.calendar_type = "year"
    if wp.device not in DEVICES:
        wp.device = DEFAULT_DEVICE_ID
    if wp.theme not in THEMES:
        wp.theme = DEFAULT_THEME_NAME
    wp.accent = normalize_accent(wp.accent)


def _normalize_life(cfg: AppConfig) -> None:
    try:
        expectancy = int(cfg.life.expectancy)
    except (TypeError, ValueError):
        expectancy = 80
    cfg.life.expectancy = expectancy if 0 < expectancy <= MAX_LIFE_EXPECTANCY else 80


def _normalize_server(cfg: AppConfig) -> None:
    cfg.server.port = max(1, min(65535, int(cfg.server.port)))
    cfg.server.cache_max_age = max(0, int(cfg.server.cache_max_age))
    cfg.export.preview_scale = float(max(0.05, min(1.0, cfg.export.preview_scale)))
    cfg.logging.keep_log_files = max(2, int(cfg.logging.keep_log_files))


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 kept every wizard field flat at the top level.
        wallpaper = dict(data.get("wallpaper", {}) or {})
        for old, new in (("type", "calendar_type"), ("device", "device"), ("accent", "accent")):
            if old in data and not isinstance(data[old], dict):
                wallpaper.setdefault(new, data.pop(old))
        data["wallpaper"] = wallpaper

        life = dict(data.get("life", {}) or {})
        if "birth" in data:
            life.setdefault("birth_date", data.pop("birth"))
        if "expectancy" in data:
            life.setdefault("expectancy", data.pop("expectancy"))
        data["life"] = life

        goal = dict(data.get("goal", {}) or {})
        if "target" in data:
            goal.setdefault("target_date", data.pop("target"))
        if "title" in data:
            goal.setdefault("title", data.pop("title"))
        data["goal"] = goal
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        wallpaper=_merge(WallpaperConfig, data.get("wallpaper", {})),
        life=_merge(LifeConfig, data.get("life", {})),
        goal=_merge(GoalConfig, data.get("goal", {})),
        server=_merge(ServerConfig, data.get("server", {})),
        export=_merge(ExportConfig, data.get("export", {})),
        logging=_merge(LoggingConfig, data.get("logging", {})),
    )

    _normalize_wallpaper(cfg)
    _normalize_life(cfg)
    _normalize_server(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
