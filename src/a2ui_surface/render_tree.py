"""
Host seam for rendering.

``RenderPrimitives`` receives fully resolved props for one component and
returns whatever node type the host UI stack uses. ``NodePrimitives`` is the
reference implementation: it builds plain ``RenderNode`` trees that tests,
the CLI and non-graphical hosts consume directly.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

NodeT = TypeVar("NodeT")

HEADING_LEVELS: Dict[str, int] = {"h1": 1, "h2": 2, "h3": 3, "h4": 4}


@dataclass
class RenderNode:
    kind: str
    component_id: Optional[str] = None
    text: Optional[str] = None
    props: Dict[str, Any] = field(default_factory=dict)
    children: List["RenderNode"] = field(default_factory=list)
    on_activate: Optional[Callable[[], None]] = field(default=None, compare=False, repr=False)

    @property
    def actionable(self) -> bool:
        return self.on_activate is not None

    def activate(self) -> None:
        if self.on_activate is not None:
            self.on_activate()

    def find(self, kind: str) -> List["RenderNode"]:
        """All nodes of ``kind`` in depth-first order, including this one."""
        found = [self] if self.kind == kind else []
        for child in self.children:
            found.extend(child.find(kind))
        return found

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"kind": self.kind}
        if self.component_id is not None:
            payload["component_id"] = self.component_id
        if self.text is not None:
            payload["text"] = self.text
        if self.props:
            payload["props"] = dict(self.props)
        if self.actionable:
            payload["actionable"] = True
        if self.children:
            payload["children"] = [child.to_dict() for child in self.children]
        return payload


class RenderPrimitives(ABC, Generic[NodeT]):
    """One factory method per supported component kind, plus diagnostics."""

    @abstractmethod
    def text(self, component_id: str, text: str, variant: str) -> NodeT: ...

    @abstractmethod
    def button(
        self,
        component_id: str,
        label: str,
        primary: bool,
        on_activate: Optional[Callable[[], None]],
    ) -> NodeT: ...

    @abstractmethod
    def column(self, component_id: str, children: Sequence[NodeT], alignment: str) -> NodeT: ...

    @abstractmethod
    def row(self, component_id: str, children: Sequence[NodeT], distribution: str) -> NodeT: ...

    @abstractmethod
    def card(self, component_id: str, child: Optional[NodeT]) -> NodeT: ...

    @abstractmethod
    def list(self, component_id: str, children: Sequence[NodeT]) -> NodeT: ...

    @abstractmethod
    def icon(self, component_id: str, name: str, glyph: str, pixel_size: int) -> NodeT: ...

    @abstractmethod
    def divider(self, component_id: str, orientation: str) -> NodeT: ...

    @abstractmethod
    def spacer(self, component_id: str, size: str, units: int) -> NodeT: ...

    @abstractmethod
    def not_found(self, component_id: str) -> NodeT: ...

    @abstractmethod
    def error(self, component_id: str, kind: str, message: str) -> NodeT: ...

    @abstractmethod
    def cycle(self, component_id: str, trail: Sequence[str]) -> NodeT: ...

    @abstractmethod
    def surface(self, surface_id: str, child: Optional[NodeT], styles: Dict[str, Any]) -> NodeT: ...

    @abstractmethod
    def missing_root(self, surface_id: str) -> NodeT: ...

    @abstractmethod
    def container(self, surfaces: Sequence[NodeT]) -> NodeT: ...


class NodePrimitives(RenderPrimitives[RenderNode]):
    def text(self, component_id: str, text: str, variant: str) -> RenderNode:
        props: Dict[str, Any] = {"variant": variant}
        if variant in HEADING_LEVELS:
            props["heading_level"] = HEADING_LEVELS[variant]
        return RenderNode(kind="text", component_id=component_id, text=text, props=props)

    def button(self, component_id, label, primary, on_activate) -> RenderNode:
        return RenderNode(
            kind="button",
            component_id=component_id,
            text=label,
            props={"primary": bool(primary)},
            on_activate=on_activate,
        )

    def column(self, component_id, children, alignment) -> RenderNode:
        return RenderNode(
            kind="column",
            component_id=component_id,
            props={"alignment": alignment},
            children=list(children),
        )

    def row(self, component_id, children, distribution) -> RenderNode:
        return RenderNode(
            kind="row",
            component_id=component_id,
            props={"distribution": distribution},
            children=list(children),
        )

    def card(self, component_id, child) -> RenderNode:
        return RenderNode(
            kind="card",
            component_id=component_id,
            children=[child] if child is not None else [],
        )

    def list(self, component_id, children) -> RenderNode:
        return RenderNode(kind="list", component_id=component_id, children=[*children])

    def icon(self, component_id, name, glyph, pixel_size) -> RenderNode:
        return RenderNode(
            kind="icon",
            component_id=component_id,
            text=glyph,
            props={"name": name, "pixel_size": pixel_size},
        )

    def divider(self, component_id, orientation) -> RenderNode:
        return RenderNode(kind="divider", component_id=component_id, props={"orientation": orientation})

    def spacer(self, component_id, size, units) -> RenderNode:
        return RenderNode(kind="spacer", component_id=component_id, props={"size": size, "units": units})

    def not_found(self, component_id) -> RenderNode:
        return RenderNode(
            kind="not_found",
            component_id=component_id,
            text=f"Component not found: {component_id}",
        )

    def error(self, component_id, kind, message) -> RenderNode:
        return RenderNode(
            kind="error",
            component_id=component_id,
            text=f"Error rendering {kind}",
            props={"component_kind": kind, "message": message},
        )

    def cycle(self, component_id, trail) -> RenderNode:
        return RenderNode(
            kind="cycle",
            component_id=component_id,
            text=f"Circular reference to component: {component_id}",
            props={"trail": [*trail]},
        )

    def surface(self, surface_id, child, styles) -> RenderNode:
        return RenderNode(
            kind="surface",
            component_id=surface_id,
            props={"styles": dict(styles)} if styles else {},
            children=[child] if child is not None else [],
        )

    def missing_root(self, surface_id) -> RenderNode:
        return RenderNode(
            kind="missing_root",
            component_id=surface_id,
            text=f"No root component found for surface: {surface_id}",
        )

    def container(self, surfaces) -> RenderNode:
        return RenderNode(kind="container", children=[*surfaces])
