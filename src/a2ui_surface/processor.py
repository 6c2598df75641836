from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from .data_model import apply_data_model_update, decode_contents_to_object
from .error_codes import ERROR_MALFORMED_COMPONENT, ERROR_MALFORMED_MESSAGE
from .protocol import (
    BeginRenderingMessage,
    DataModelUpdateMessage,
    DeleteSurfaceMessage,
    SurfaceUpdateMessage,
    UserActionMessage,
    decode_component,
    decode_message,
)
from .settings import get_renderer_settings
from .surface import Surface

logger = logging.getLogger(__name__)


class A2UIProcessor:
    """
    Apply A2UI protocol messages to the surfaces they address.

    The processor is the only writer of the surface map. Messages are applied
    strictly in order; malformed messages and entries are skipped so one bad
    message never aborts a batch.
    """

    def __init__(self, *, honor_delete_surface: Optional[bool] = None) -> None:
        settings = get_renderer_settings()
        self.honor_delete_surface = (
            settings.honor_delete_surface if honor_delete_surface is None else bool(honor_delete_surface)
        )
        self._surfaces: Dict[str, Surface] = {}
        self._mutations = 0

    def process_messages(self, messages: Iterable[Any]) -> Dict[str, Surface]:
        for message in messages or []:
            try:
                self._process_one(message)
            except Exception:
                logger.exception("[%s] failed to apply message; skipping", ERROR_MALFORMED_MESSAGE)
        return self._surfaces

    def get_surface(self, surface_id: str) -> Optional[Surface]:
        return self._surfaces.get(surface_id)

    def get_all_surfaces(self) -> List[Surface]:
        return list(self._surfaces.values())

    @property
    def surfaces(self) -> Dict[str, Surface]:
        return self._surfaces

    def evict(self, surface_id: str) -> bool:
        return self._surfaces.pop(surface_id, None) is not None

    def clear(self) -> None:
        self._surfaces.clear()

    def _process_one(self, message: Any) -> None:
        decoded = decode_message(message)
        if decoded is None:
            return
        tag, payload = decoded
        if isinstance(payload, BeginRenderingMessage):
            self._handle_begin_rendering(payload)
        elif isinstance(payload, SurfaceUpdateMessage):
            self._handle_surface_update(payload)
        elif isinstance(payload, DataModelUpdateMessage):
            self._handle_data_model_update(payload)
        elif isinstance(payload, DeleteSurfaceMessage):
            self._handle_delete_surface(payload)
        elif isinstance(payload, UserActionMessage):
            logger.debug("userAction '%s' is client-bound; no surface change", payload.name)
        else:
            logger.debug("no handler for message tag %s", tag)

    def _touch(self, surface: Surface) -> None:
        self._mutations += 1
        surface.bump_version(self._mutations)

    def _ensure_surface(self, surface_id: str) -> Surface:
        surface = self._surfaces.get(surface_id)
        if surface is None:
            surface = Surface(id=surface_id)
            self._surfaces[surface_id] = surface
            logger.debug("created surface %s", surface_id)
        return surface

    def _handle_begin_rendering(self, message: BeginRenderingMessage) -> None:
        surface = self._ensure_surface(message.surfaceId)
        if message.root is not None:
            surface.root = message.root
        if message.styles is not None:
            surface.styles = message.styles
        self._touch(surface)

    def _handle_surface_update(self, message: SurfaceUpdateMessage) -> None:
        surface = self._ensure_surface(message.surfaceId)
        for raw in message.components:
            definition = decode_component(raw)
            if definition is None:
                logger.warning(
                    "[%s] skipping component entry on surface %s: %r",
                    ERROR_MALFORMED_COMPONENT,
                    message.surfaceId,
                    raw if not isinstance(raw, dict) else raw.get("id"),
                )
                continue
            surface.components.upsert(definition)
        self._touch(surface)

    def _handle_data_model_update(self, message: DataModelUpdateMessage) -> None:
        surface = self._ensure_surface(message.surfaceId)
        payload = decode_contents_to_object(message.contents)
        if not message.contents and message.value:
            payload = dict(message.value)
        surface.data_model = apply_data_model_update(
            surface.data_model,
            path=message.path,
            payload=payload,
        )
        self._touch(surface)

    def _handle_delete_surface(self, message: DeleteSurfaceMessage) -> None:
        if not self.honor_delete_surface:
            logger.debug("deleteSurface for %s ignored; eviction is host-controlled", message.surfaceId)
            return
        if self.evict(message.surfaceId):
            logger.debug("deleted surface %s", message.surfaceId)
