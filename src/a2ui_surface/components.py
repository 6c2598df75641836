"""
Typed component variants.

A component definition arrives as ``{"<Kind>": {...props}}``. The registry
stores that raw body; ``parse_component`` turns it into exactly one of the
variant models below, or ``UnknownComponent`` for kinds this engine does not
know. Prop validation happens here, at render time, so a malformed body only
fails its own node.
"""
from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, List, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .binding import to_display_text

COMPONENT_CATALOG_VERSION = "0.8"


class BoundValue(BaseModel):
    """Literal-or-path value descriptor."""

    model_config = ConfigDict(extra="ignore")

    literalString: Optional[str] = None
    literalNumber: Optional[float] = None
    literalBoolean: Optional[bool] = None
    path: Optional[str] = None

    @field_validator("literalString", mode="before")
    @classmethod
    def _coerce_scalar_literal(cls, value: Any) -> Any:
        if isinstance(value, (bool, int, float)):
            return to_display_text(value)
        return value


class ActionContextEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    key: str = Field(min_length=1)
    value: BoundValue = Field(default_factory=BoundValue)


class Action(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    context: List[ActionContextEntry] = Field(default_factory=list)

    def context_payload(self) -> List[Dict[str, Any]]:
        return [entry.model_dump(mode="json", exclude_none=True) for entry in self.context]


class TemplateRef(BaseModel):
    model_config = ConfigDict(extra="ignore")

    componentId: str = Field(min_length=1)
    dataBinding: Optional[str] = None


class ChildrenSpec(BaseModel):
    model_config = ConfigDict(extra="ignore")

    explicitList: Optional[List[str]] = None
    template: Optional[TemplateRef] = None


class _ComponentBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    kind: str = ""


class TextComponent(_ComponentBody):
    kind: str = "Text"
    text: Optional[BoundValue] = None
    usageHint: Optional[str] = None


class ButtonComponent(_ComponentBody):
    kind: str = "Button"
    child: Optional[str] = None
    primary: bool = False
    action: Optional[Action] = None


class ColumnComponent(_ComponentBody):
    kind: str = "Column"
    children: Optional[ChildrenSpec] = None
    alignment: Optional[str] = None


class RowComponent(_ComponentBody):
    kind: str = "Row"
    children: Optional[ChildrenSpec] = None
    distribution: Optional[str] = None


class CardComponent(_ComponentBody):
    kind: str = "Card"
    child: Optional[str] = None


class ListComponent(_ComponentBody):
    kind: str = "List"
    children: Optional[ChildrenSpec] = None


class IconComponent(_ComponentBody):
    kind: str = "Icon"
    icon: Optional[str] = None
    size: Optional[str] = None


class DividerComponent(_ComponentBody):
    kind: str = "Divider"
    orientation: Optional[str] = None


class SpacerComponent(_ComponentBody):
    kind: str = "Spacer"
    size: Optional[str] = None


class UnknownComponent(_ComponentBody):
    """Catch-all for kinds outside the catalog; renders nothing."""

    model_config = ConfigDict(extra="allow")


ComponentVariant = Union[
    TextComponent,
    ButtonComponent,
    ColumnComponent,
    RowComponent,
    CardComponent,
    ListComponent,
    IconComponent,
    DividerComponent,
    SpacerComponent,
    UnknownComponent,
]

COMPONENT_MODELS: Dict[str, Type[_ComponentBody]] = {
    "Text": TextComponent,
    "Button": ButtonComponent,
    "Column": ColumnComponent,
    "Row": RowComponent,
    "Card": CardComponent,
    "List": ListComponent,
    "Icon": IconComponent,
    "Divider": DividerComponent,
    "Spacer": SpacerComponent,
}

TEXT_VARIANTS = ("h1", "h2", "h3", "h4", "caption", "body")
COLUMN_ALIGNMENTS = ("start", "center", "end")
ROW_DISTRIBUTIONS = ("start", "center", "end", "spaceBetween", "spaceAround")
DIVIDER_ORIENTATIONS = ("horizontal", "vertical")
SIZES = ("small", "medium", "large")

ICON_PIXEL_SIZES: Dict[str, int] = {"small": 16, "medium": 24, "large": 32}
SPACER_UNITS: Dict[str, int] = {"small": 1, "medium": 2, "large": 4}
DEFAULT_ICON = "circle"
ICON_GLYPHS: Dict[str, str] = {
    "check": "✓",
    "close": "✕",
    "info": "ℹ",
    "warning": "⚠",
    "error": "✕",
    "arrow_right": "→",
    "arrow_left": "←",
    "arrow_up": "↑",
    "arrow_down": "↓",
    "circle": "●",
    "star": "★",
    "heart": "♥",
    "menu": "☰",
    "settings": "⚙",
    "search": "\U0001f50d",
    "home": "\U0001f3e0",
    "user": "\U0001f464",
}


def normalize_choice(value: Any, allowed: tuple, default: str) -> str:
    return value if isinstance(value, str) and value in allowed else default


def supported_component_types() -> set[str]:
    return set(COMPONENT_MODELS.keys())


def parse_component(kind: str, props: Any) -> ComponentVariant:
    """Build the typed variant for ``kind``; raises ValidationError on bad props."""
    model = COMPONENT_MODELS.get(kind)
    body = dict(props) if isinstance(props, Mapping) else {}
    if model is None:
        body["kind"] = kind
        return UnknownComponent.model_validate(body)
    if props is not None and not isinstance(props, Mapping):
        raise ValueError(f"{kind} properties must be an object, got {type(props).__name__}")
    body["kind"] = kind
    return model.model_validate(body)


def get_component_catalog() -> Dict[str, Any]:
    return {
        "version": COMPONENT_CATALOG_VERSION,
        "components": {
            name: deepcopy(model.model_json_schema()) for name, model in COMPONENT_MODELS.items()
        },
    }
