from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RendererSettings:
    # Longest chain of nested component references resolved in one pass.
    max_depth: int = 64
    # Total component resolutions allowed in one render pass of a surface.
    max_nodes: int = 10000
    honor_delete_surface: bool = False
    # 0 disables eviction.
    max_surfaces: int = 0
    log_unknown_components: bool = True


_RENDERER_SETTINGS = RendererSettings()

__all__ = [
    "RendererSettings",
    "configure_renderer",
    "get_renderer_settings",
    "reset_renderer_settings",
]


def _normalize_int(value: Any, default: int, *, minimum: int = 0) -> int:
    if isinstance(value, bool):
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    if parsed < minimum:
        return default
    return parsed


def _normalize_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in {"1", "true", "yes", "on"}:
            return True
        if text in {"0", "false", "no", "off"}:
            return False
    return default


def configure_renderer(config_dict: dict[str, Any]) -> None:
    """Configure process-wide renderer defaults from the ``renderer_config`` block."""
    global _RENDERER_SETTINGS

    block = config_dict.get("renderer_config") if isinstance(config_dict, dict) else None
    if not isinstance(block, dict):
        return

    _RENDERER_SETTINGS = replace(
        _RENDERER_SETTINGS,
        max_depth=_normalize_int(block.get("max_depth"), _RENDERER_SETTINGS.max_depth, minimum=1),
        max_nodes=_normalize_int(block.get("max_nodes"), _RENDERER_SETTINGS.max_nodes, minimum=1),
        honor_delete_surface=_normalize_bool(
            block.get("honor_delete_surface"), _RENDERER_SETTINGS.honor_delete_surface
        ),
        max_surfaces=_normalize_int(block.get("max_surfaces"), _RENDERER_SETTINGS.max_surfaces, minimum=0),
        log_unknown_components=_normalize_bool(
            block.get("log_unknown_components"), _RENDERER_SETTINGS.log_unknown_components
        ),
    )
    logger.debug("renderer settings configured: %s", _RENDERER_SETTINGS)


def get_renderer_settings() -> RendererSettings:
    return _RENDERER_SETTINGS


def reset_renderer_settings() -> None:
    global _RENDERER_SETTINGS
    _RENDERER_SETTINGS = RendererSettings()
