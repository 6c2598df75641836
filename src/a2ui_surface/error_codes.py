from __future__ import annotations

from typing import Final

ERROR_MALFORMED_MESSAGE: Final[str] = "malformed_message"
ERROR_MALFORMED_COMPONENT: Final[str] = "malformed_component"
ERROR_MALFORMED_DATA_ENTRY: Final[str] = "malformed_data_entry"
ERROR_COMPONENT_NOT_FOUND: Final[str] = "component_not_found"
ERROR_COMPONENT_CYCLE: Final[str] = "component_cycle"
ERROR_DEPTH_LIMIT: Final[str] = "depth_limit_exceeded"
ERROR_NODE_LIMIT: Final[str] = "node_limit_exceeded"
ERROR_RENDER_FAILED: Final[str] = "render_failed"
ERROR_INVALID_CONFIG: Final[str] = "invalid_config"


class A2UIError(Exception):
    """Base class for errors raised by the surface engine."""

    code: str = ERROR_RENDER_FAILED

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        if code:
            self.code = code


class ComponentResolutionError(A2UIError):
    """Raised inside the resolver; always contained at the failing node."""

    def __init__(self, message: str, *, component_id: str, code: str = ERROR_RENDER_FAILED) -> None:
        super().__init__(message, code=code)
        self.component_id = component_id


class ConfigError(A2UIError):
    code = ERROR_INVALID_CONFIG
