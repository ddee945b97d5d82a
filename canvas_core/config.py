# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] Config model
# [NAV-20] Config loading / saving
# [NAV-99] End
# =============================================================================

# === [NAV-00] Imports / constants ============================================
from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_PATH = Path("data/roaming/canvas_config.json")


# === [NAV-10] Config model ===================================================
@dataclass
class CanvasConfig:
    aspect_ratio: float = 1.0
    margin: float = 20.0
    draw_frame: bool = False
    show_cursor: bool = True
    zoom_step: float = 0.9
    scroll_notch: float = 50.0
    scroll_dead_zone: float = 1.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.aspect_ratio):
            raise ValueError("aspect_ratio must be finite")
        if self.aspect_ratio <= 0:
            logger.warning("aspect_ratio %r is not positive; using 1.0", self.aspect_ratio)
            self.aspect_ratio = 1.0
        if not (0.0 < self.zoom_step < 1.0):
            logger.warning("zoom_step %r outside (0, 1); using 0.9", self.zoom_step)
            self.zoom_step = 0.9
        if not (math.isfinite(self.scroll_notch) and self.scroll_notch > 0):
            logger.warning("scroll_notch %r is not positive; using 50.0", self.scroll_notch)
            self.scroll_notch = 50.0


_DEFAULTS = CanvasConfig()


# === [NAV-20] Config loading / saving ========================================
def _coerce(name: str, value: object, default: object) -> object:
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
    elif isinstance(default, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    logger.warning("canvas config key %s has invalid value %r; using %r", name, value, default)
    return default


def config_from_dict(data: Dict) -> CanvasConfig:
    values = {}
    for item in fields(CanvasConfig):
        if item.name in data:
            values[item.name] = _coerce(item.name, data[item.name], getattr(_DEFAULTS, item.name))
    return CanvasConfig(**values)


def load_canvas_config(path: Optional[Path] = None) -> CanvasConfig:
    path = path or CONFIG_PATH
    if not path.exists():
        save_canvas_config(CanvasConfig(), path)
        return CanvasConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.warning("unreadable canvas config at %s; using defaults", path)
        return CanvasConfig()
    if not isinstance(data, dict):
        return CanvasConfig()
    return config_from_dict(data)


def save_canvas_config(config: CanvasConfig, path: Optional[Path] = None) -> None:
    path = path or CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(config), indent=2), encoding="utf-8")


# === [NAV-99] End =============================================================
__all__ = [
    "CONFIG_PATH",
    "CanvasConfig",
    "config_from_dict",
    "load_canvas_config",
    "save_canvas_config",
]
