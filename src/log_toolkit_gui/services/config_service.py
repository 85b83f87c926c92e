from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from log_toolkit_gui.services.log_files import DEFAULT_ENCODING, LOG_SUFFIX

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigPaths:
    path: Path


@dataclass(frozen=True)
class ToolkitConfig:
    roots: list[str] = field(default_factory=list)
    suffix: str = LOG_SUFFIX
    encoding: str = DEFAULT_ENCODING
    log_level: str = "INFO"

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "ToolkitConfig":
        roots_obj = cfg.get("roots")
        roots: list[str]
        if isinstance(roots_obj, list):
            roots = [str(x).strip() for x in roots_obj if str(x).strip()]
        else:
            roots = []
        return cls(
            roots=roots,
            suffix=str(cfg.get("suffix") or LOG_SUFFIX),
            encoding=str(cfg.get("encoding") or DEFAULT_ENCODING),
            log_level=str(cfg.get("log_level") or "INFO").upper(),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class ConfigService:
    def __init__(self, paths: ConfigPaths | None = None) -> None:
        self.paths = paths or ConfigPaths(path=self.default_path())

    @staticmethod
    def default_path() -> Path:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        if xdg:
            base = Path(xdg)
        else:
            base = Path.home() / ".config"
        return base / "log_toolkit_gui" / "config.json"

    def load(self) -> ToolkitConfig:
        p = self.paths.path
        if not p.exists():
            return ToolkitConfig()
        try:
            with open(p, "r", encoding="utf-8") as f:
                obj = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable config %s: %s", p, e)
            return ToolkitConfig()
        return ToolkitConfig.from_mapping(obj if isinstance(obj, dict) else {})

    def save(self, cfg: ToolkitConfig) -> None:
        p = self.paths.path
        p.parent.mkdir(parents=True, exist_ok=True)
        tmp = p.with_suffix(p.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(cfg.to_dict(), f, ensure_ascii=False, indent=2, sort_keys=True)
        tmp.replace(p)
