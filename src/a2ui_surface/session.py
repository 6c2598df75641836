from __future__ import annotations

import logging
import time
from copy import deepcopy
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional
from uuid import uuid4

from .context import ActionCallback
from .processor import A2UIProcessor
from .render_tree import RenderPrimitives
from .renderer import SurfaceRenderer
from .settings import get_renderer_settings
from .surface import Surface

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    return f"a2ui_{uuid4().hex[:12]}"


class SessionState(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"


class SurfaceSession:
    """
    Owns the surface map for one chat/agent session.

    Hosts create a session when the conversation starts, feed it every
    message batch, and close it when the conversation ends. When
    ``max_surfaces`` is positive, the least recently updated surfaces are
    evicted after each batch that leaves the map over the limit.
    """

    def __init__(
        self,
        *,
        session_id: Optional[str] = None,
        max_surfaces: Optional[int] = None,
        primitives: Optional[RenderPrimitives[Any]] = None,
        processor: Optional[A2UIProcessor] = None,
    ) -> None:
        settings = get_renderer_settings()
        self.session_id = session_id or new_session_id()
        self.max_surfaces = max(0, int(settings.max_surfaces if max_surfaces is None else max_surfaces))
        self.processor = processor or A2UIProcessor()
        self.renderer: SurfaceRenderer[Any] = SurfaceRenderer(primitives)
        self.state = SessionState.ACTIVE
        self.created_at = time.time()
        self.updated_at = self.created_at
        self.evicted: List[str] = []

    @property
    def closed(self) -> bool:
        return self.state is SessionState.CLOSED

    @property
    def surfaces(self) -> List[Surface]:
        return self.processor.get_all_surfaces()

    def get_surface(self, surface_id: str) -> Optional[Surface]:
        return self.processor.get_surface(surface_id)

    def process_messages(self, messages: Iterable[Any]) -> List[Surface]:
        if self.closed:
            logger.warning("session %s is closed; dropping message batch", self.session_id)
            return []
        self.processor.process_messages(messages)
        self.updated_at = time.time()
        self._enforce_limit()
        return self.surfaces

    def render(self, on_action: Optional[ActionCallback] = None) -> Any:
        return self.renderer.render_all(self.surfaces, on_action)

    def render_surface(self, surface_id: str, on_action: Optional[ActionCallback] = None) -> Any:
        surface = self.get_surface(surface_id)
        if surface is None:
            return None
        return self.renderer.render_surface(surface, on_action)

    def evict(self, surface_id: str) -> bool:
        removed = self.processor.evict(surface_id)
        if removed:
            self.evicted.append(surface_id)
            logger.debug("session %s evicted surface %s", self.session_id, surface_id)
        return removed

    def close(self) -> None:
        self.processor.clear()
        self.state = SessionState.CLOSED
        self.updated_at = time.time()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "state": self.state.value,
            "surface_count": len(self.processor.surfaces),
            "max_surfaces": self.max_surfaces,
            "evicted": list(self.evicted),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def _enforce_limit(self) -> None:
        if self.max_surfaces <= 0:
            return
        overflow = len(self.processor.surfaces) - self.max_surfaces
        if overflow <= 0:
            return
        oldest = sorted(self.surfaces, key=lambda surface: surface.touched)
        for surface in oldest[:overflow]:
            self.evict(surface.id)


def surface_summaries(surfaces: Iterable[Surface]) -> List[Dict[str, Any]]:
    ordered = sorted(surfaces, key=lambda surface: surface.touched, reverse=True)
    return [surface.to_dict() for surface in ordered]


def snapshot_surface(
    surfaces: Mapping[str, Surface],
    *,
    surface_id: str,
) -> Optional[Dict[str, Any]]:
    surface = surfaces.get(surface_id)
    if surface is None:
        return None
    return deepcopy(surface.snapshot())
