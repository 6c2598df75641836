from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence

from .binding import resolve_path
from .components import TemplateRef
from .context import RenderContext


@dataclass(frozen=True)
class TemplateChild:
    component_id: str
    context: RenderContext


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _bound_value(template: TemplateRef, context: RenderContext) -> Any:
    if not template.dataBinding:
        return None
    return resolve_path(context.data_model, template.dataBinding)


def expand_list_template(template: TemplateRef, context: RenderContext) -> Optional[List[TemplateChild]]:
    """
    One child per bound item, each rendered with the item as its data model.

    Returns None when the binding does not resolve to a sequence or mapping.
    """
    data = _bound_value(template, context)
    if isinstance(data, Mapping):
        items = list(data.values())
    elif _is_sequence(data):
        items = list(data)
    else:
        return None
    return [TemplateChild(template.componentId, context.scoped(item)) for item in items]


def expand_column_template(template: TemplateRef, context: RenderContext) -> List[TemplateChild]:
    """One synthetic ``{componentId}-{key}`` child per bound key, unscoped."""
    data = _bound_value(template, context)
    if isinstance(data, Mapping):
        keys = [str(key) for key in data.keys()]
    elif _is_sequence(data):
        keys = [str(index) for index in range(len(data))]
    else:
        return []
    return [TemplateChild(f"{template.componentId}-{key}", context) for key in keys]
