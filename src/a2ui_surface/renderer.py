from __future__ import annotations

import logging
from typing import Any, Dict, Generic, Iterable, Optional

from .context import ActionCallback, RenderBudget, RenderContext
from .render_tree import NodeT, RenderPrimitives
from .resolver import ComponentResolver
from .surface import Surface

logger = logging.getLogger(__name__)


class SurfaceRenderer(Generic[NodeT]):
    """Top-level entry: pick a surface's root and hand it to the resolver."""

    def __init__(
        self,
        primitives: Optional[RenderPrimitives[NodeT]] = None,
        *,
        resolver: Optional[ComponentResolver[NodeT]] = None,
    ) -> None:
        self.resolver: ComponentResolver[Any] = resolver or ComponentResolver(primitives)
        self.primitives = self.resolver.primitives

    def render_surface(
        self,
        surface: Surface,
        on_action: Optional[ActionCallback] = None,
    ) -> NodeT:
        if not surface.root or surface.root not in surface.components:
            logger.debug("surface %s has no resolvable root (%r)", surface.id, surface.root)
            return self.primitives.missing_root(surface.id)

        context = RenderContext(
            components=surface.components,
            data_model=surface.data_model,
            on_action=on_action,
            budget=RenderBudget(),
        )
        child = self.resolver.resolve(surface.root, context)
        styles: Dict[str, Any] = (
            surface.styles.model_dump(exclude_none=True) if surface.styles is not None else {}
        )
        return self.primitives.surface(surface.id, child, styles)

    def render_all(
        self,
        surfaces: Iterable[Surface],
        on_action: Optional[ActionCallback] = None,
    ) -> Optional[NodeT]:
        nodes = [self.render_surface(surface, on_action) for surface in surfaces]
        if not nodes:
            return None
        return self.primitives.container(nodes)
