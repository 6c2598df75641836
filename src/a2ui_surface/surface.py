from __future__ import annotations

import time
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .protocol import ComponentDef, SurfaceStyles


class ComponentRegistry:
    """
    Flat table of component definitions for one surface.

    Definitions live in insertion-ordered slots; ``_index`` maps an id to its
    slot. An upsert for a known id fully replaces the definition in place.
    """

    def __init__(self) -> None:
        self._slots: List[ComponentDef] = []
        self._index: Dict[str, int] = {}

    def upsert(self, definition: ComponentDef) -> None:
        slot = self._index.get(definition.id)
        if slot is None:
            self._index[definition.id] = len(self._slots)
            self._slots.append(definition)
        else:
            self._slots[slot] = definition

    def get(self, component_id: Any) -> Optional[ComponentDef]:
        slot = self._index.get(component_id) if isinstance(component_id, str) else None
        if slot is None:
            return None
        return self._slots[slot]

    def index_of(self, component_id: str) -> Optional[int]:
        return self._index.get(component_id)

    def ids(self) -> List[str]:
        return [definition.id for definition in self._slots]

    def __contains__(self, component_id: object) -> bool:
        return isinstance(component_id, str) and component_id in self._index

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[ComponentDef]:
        return iter(list(self._slots))


@dataclass
class Surface:
    id: str
    root: Optional[str] = None
    components: ComponentRegistry = field(default_factory=ComponentRegistry)
    data_model: Any = field(default_factory=dict)
    styles: Optional[SurfaceStyles] = None
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)
    version: int = 1
    # Processor-wide mutation counter value at the last change.
    touched: int = 0

    def bump_version(self, touched: int = 0) -> None:
        self.version += 1
        self.touched = touched
        self.updated_at = time.time()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "surface_id": self.id,
            "root": self.root,
            "component_count": len(self.components),
            "styles": self.styles.model_dump(exclude_none=True) if self.styles else None,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "version": self.version,
        }

    def snapshot(self) -> Dict[str, Any]:
        snapshot = self.to_dict()
        snapshot["data_model"] = deepcopy(self.data_model)
        snapshot["components"] = [
            definition.model_dump(mode="json", exclude_none=True) for definition in self.components
        ]
        return snapshot
