from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Generic, List, Optional, Type

from .binding import resolve_text
from .components import (
    COLUMN_ALIGNMENTS,
    COMPONENT_MODELS,
    DEFAULT_ICON,
    DIVIDER_ORIENTATIONS,
    ICON_GLYPHS,
    ICON_PIXEL_SIZES,
    ROW_DISTRIBUTIONS,
    SIZES,
    SPACER_UNITS,
    TEXT_VARIANTS,
    BoundValue,
    ButtonComponent,
    CardComponent,
    ColumnComponent,
    DividerComponent,
    IconComponent,
    ListComponent,
    RowComponent,
    SpacerComponent,
    TextComponent,
    UnknownComponent,
    normalize_choice,
    parse_component,
)
from .context import RenderContext
from .error_codes import (
    ERROR_COMPONENT_CYCLE,
    ERROR_COMPONENT_NOT_FOUND,
    ERROR_DEPTH_LIMIT,
    ERROR_NODE_LIMIT,
    ERROR_RENDER_FAILED,
    ComponentResolutionError,
)
from .render_tree import NodePrimitives, NodeT, RenderPrimitives
from .settings import get_renderer_settings
from .templates import expand_column_template, expand_list_template

logger = logging.getLogger(__name__)

_HANDLER_NAMES: Dict[Type[Any], str] = {
    TextComponent: "_render_text",
    ButtonComponent: "_render_button",
    ColumnComponent: "_render_column",
    RowComponent: "_render_row",
    CardComponent: "_render_card",
    ListComponent: "_render_list",
    IconComponent: "_render_icon",
    DividerComponent: "_render_divider",
    SpacerComponent: "_render_spacer",
    UnknownComponent: "_render_unknown",
}

if set(_HANDLER_NAMES) != set(COMPONENT_MODELS.values()) | {UnknownComponent}:
    missing = sorted(
        model.__name__ for model in set(COMPONENT_MODELS.values()) - set(_HANDLER_NAMES)
    )
    raise RuntimeError(f"Component resolver dispatch table drift detected. Missing={missing}")


def _descriptor(value: Optional[BoundValue]) -> Optional[Dict[str, Any]]:
    return value.model_dump(exclude_none=True) if value is not None else None


class ComponentResolver(Generic[NodeT]):
    """
    Turn ``(component_id, RenderContext)`` into a host node, recursively.

    Every component is resolved inside its own error boundary: a failure
    becomes an error node for that component only and never reaches its
    siblings or ancestors. Missing ids become visible not-found nodes,
    unknown kinds render nothing, and references that loop back onto the
    current resolution trail become cycle nodes. A render pass that resolves
    more than ``max_nodes`` components turns every further component into an
    error node instead of recursing.
    """

    def __init__(
        self,
        primitives: Optional[RenderPrimitives[NodeT]] = None,
        *,
        max_depth: Optional[int] = None,
        max_nodes: Optional[int] = None,
        log_unknown_components: Optional[bool] = None,
    ) -> None:
        settings = get_renderer_settings()
        self.primitives: RenderPrimitives[Any] = primitives or NodePrimitives()
        self.max_depth = max(1, int(settings.max_depth if max_depth is None else max_depth))
        self.max_nodes = max(1, int(settings.max_nodes if max_nodes is None else max_nodes))
        self.log_unknown_components = (
            settings.log_unknown_components
            if log_unknown_components is None
            else bool(log_unknown_components)
        )
        self._handlers: Dict[Type[Any], Callable[[str, Any, RenderContext], Optional[NodeT]]] = {
            model: getattr(self, name) for model, name in _HANDLER_NAMES.items()
        }

    def resolve(self, component_id: str, context: RenderContext) -> Optional[NodeT]:
        definition = context.components.get(component_id)
        if definition is None:
            logger.debug("[%s] %s", ERROR_COMPONENT_NOT_FOUND, component_id)
            return self.primitives.not_found(str(component_id))

        kind = definition.kind
        spent = context.budget.spend()
        if spent > self.max_nodes:
            if spent == self.max_nodes + 1:
                logger.warning(
                    "[%s] render pass exceeded %d components at '%s'",
                    ERROR_NODE_LIMIT,
                    self.max_nodes,
                    component_id,
                )
            return self.primitives.error(
                component_id,
                kind,
                f"maximum components per render ({self.max_nodes}) exceeded at '{component_id}'",
            )
        try:
            self._check_trail(component_id, context)
            component = parse_component(kind, definition.props)
            handler = self._handlers[type(component)]
            return handler(component_id, component, context.entering(component_id))
        except ComponentResolutionError as exc:
            if exc.code == ERROR_COMPONENT_CYCLE:
                logger.warning("[%s] %s", exc.code, exc)
                return self.primitives.cycle(component_id, context.trail)
            logger.warning("[%s] %s", exc.code, exc)
            return self.primitives.error(component_id, kind, str(exc))
        except Exception as exc:
            logger.warning(
                "[%s] error rendering %s component '%s': %s",
                ERROR_RENDER_FAILED,
                kind,
                component_id,
                exc,
            )
            return self.primitives.error(component_id, kind, str(exc))

    def resolve_children(self, component_ids: List[str], context: RenderContext) -> List[NodeT]:
        nodes = (self.resolve(component_id, context) for component_id in component_ids)
        return [node for node in nodes if node is not None]

    def _check_trail(self, component_id: str, context: RenderContext) -> None:
        if component_id in context.trail:
            raise ComponentResolutionError(
                f"component '{component_id}' references itself via {' -> '.join(context.trail)}",
                component_id=component_id,
                code=ERROR_COMPONENT_CYCLE,
            )
        if len(context.trail) >= self.max_depth:
            raise ComponentResolutionError(
                f"maximum component depth ({self.max_depth}) exceeded at '{component_id}'",
                component_id=component_id,
                code=ERROR_DEPTH_LIMIT,
            )

    def _render_text(self, component_id: str, component: TextComponent, context: RenderContext):
        text = resolve_text(_descriptor(component.text), context.data_model)
        variant = normalize_choice(component.usageHint, TEXT_VARIANTS, "body")
        return self.primitives.text(component_id, text, variant)

    def _render_button(self, component_id: str, component: ButtonComponent, context: RenderContext):
        label = "Button"
        child = context.components.get(component.child) if component.child else None
        if child is not None and child.kind == "Text":
            text_component = parse_component("Text", child.props)
            label = resolve_text(_descriptor(text_component.text), context.data_model)

        on_activate = None
        action = component.action
        callback = context.on_action
        if action is not None and callback is not None:
            def on_activate() -> None:
                callback(action.name, action.context_payload())

        return self.primitives.button(component_id, label, component.primary, on_activate)

    def _render_column(self, component_id: str, component: ColumnComponent, context: RenderContext):
        children: List[NodeT] = []
        spec = component.children
        if spec is not None and spec.explicitList is not None:
            children = self.resolve_children(spec.explicitList, context)
        elif spec is not None and spec.template is not None:
            expanded = expand_column_template(spec.template, context)
            children = self.resolve_children([item.component_id for item in expanded], context)
        alignment = normalize_choice(component.alignment, COLUMN_ALIGNMENTS, "start")
        return self.primitives.column(component_id, children, alignment)

    def _render_row(self, component_id: str, component: RowComponent, context: RenderContext):
        spec = component.children
        ids = spec.explicitList if spec is not None and spec.explicitList is not None else []
        children = self.resolve_children(ids, context)
        distribution = normalize_choice(component.distribution, ROW_DISTRIBUTIONS, "start")
        return self.primitives.row(component_id, children, distribution)

    def _render_card(self, component_id: str, component: CardComponent, context: RenderContext):
        child = self.resolve(component.child, context) if component.child else None
        return self.primitives.card(component_id, child)

    def _render_list(self, component_id: str, component: ListComponent, context: RenderContext):
        spec = component.children
        items = expand_list_template(spec.template, context) if spec is not None and spec.template else None
        if items is None:
            logger.debug("List '%s' has no bound collection; rendering nothing", component_id)
            return None
        children: List[NodeT] = []
        for item in items:
            node = self.resolve(item.component_id, item.context)
            if node is not None:
                children.append(node)
        return self.primitives.list(component_id, children)

    def _render_icon(self, component_id: str, component: IconComponent, context: RenderContext):
        name = component.icon or DEFAULT_ICON
        glyph = ICON_GLYPHS.get(name, ICON_GLYPHS[DEFAULT_ICON])
        size = normalize_choice(component.size, SIZES, "medium")
        return self.primitives.icon(component_id, name, glyph, ICON_PIXEL_SIZES[size])

    def _render_divider(self, component_id: str, component: DividerComponent, context: RenderContext):
        orientation = normalize_choice(component.orientation, DIVIDER_ORIENTATIONS, "horizontal")
        return self.primitives.divider(component_id, orientation)

    def _render_spacer(self, component_id: str, component: SpacerComponent, context: RenderContext):
        size = normalize_choice(component.size, SIZES, "medium")
        return self.primitives.spacer(component_id, size, SPACER_UNITS[size])

    def _render_unknown(self, component_id: str, component: UnknownComponent, context: RenderContext):
        if self.log_unknown_components:
            logger.debug("unsupported A2UI component kind '%s' (%s); skipping", component.kind, component_id)
        return None
