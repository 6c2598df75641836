from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Optional, Tuple

from .surface import ComponentRegistry

ActionCallback = Callable[[str, List[dict]], None]


@dataclass
class RenderBudget:
    """Resolution counter shared by every context of one render pass."""

    resolved: int = 0

    def spend(self) -> int:
        self.resolved += 1
        return self.resolved


@dataclass(frozen=True)
class RenderContext:
    """Registry, data-model scope and action callback for one resolution step."""

    components: ComponentRegistry
    data_model: Any
    on_action: Optional[ActionCallback] = None
    # Component ids currently being resolved, outermost first.
    trail: Tuple[str, ...] = ()
    budget: RenderBudget = field(default_factory=RenderBudget, compare=False)

    def scoped(self, data_model: Any) -> "RenderContext":
        return replace(self, data_model=data_model)

    def entering(self, component_id: str) -> "RenderContext":
        return replace(self, trail=self.trail + (component_id,))
