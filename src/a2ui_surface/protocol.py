from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .error_codes import ERROR_MALFORMED_MESSAGE

logger = logging.getLogger(__name__)


class ComponentDef(BaseModel):
    """
    One ``surfaceUpdate.components`` entry.

    Shape:
    {
      "id": "...",
      "weight": 1,
      "component": {"Text": {...props}}
    }
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    weight: Optional[float] = None
    component: Dict[str, Any]

    @model_validator(mode="after")
    def _validate_exactly_one_kind(self) -> "ComponentDef":
        if len(self.component) != 1:
            raise ValueError("component must contain exactly one kind key")
        kind = next(iter(self.component))
        if not kind:
            raise ValueError("component kind must be a non-empty string")
        return self

    @property
    def kind(self) -> str:
        return next(iter(self.component))

    @property
    def props(self) -> Any:
        return self.component[self.kind]


class SurfaceStyles(BaseModel):
    model_config = ConfigDict(extra="ignore")

    primaryColor: Optional[str] = None
    font: Optional[str] = None


class BeginRenderingMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    surfaceId: str = Field(min_length=1)
    root: Optional[str] = Field(default=None, min_length=1)
    styles: Optional[SurfaceStyles] = None


class SurfaceUpdateMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    surfaceId: str = Field(min_length=1)
    # Entries are validated one by one so a bad entry only drops itself.
    components: List[Any] = Field(default_factory=list)


class DataModelUpdateMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    surfaceId: str = Field(min_length=1)
    path: Optional[str] = None
    contents: List[Any] = Field(default_factory=list)
    value: Optional[Dict[str, Any]] = None


class UserActionMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    surfaceId: Optional[str] = None
    sourceComponentId: Optional[str] = None
    context: List[Any] = Field(default_factory=list)


class DeleteSurfaceMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    surfaceId: str = Field(min_length=1)


# Order matters: when a message carries several recognised keys the first wins.
MESSAGE_VARIANTS: Tuple[Tuple[str, Type[BaseModel]], ...] = (
    ("beginRendering", BeginRenderingMessage),
    ("surfaceUpdate", SurfaceUpdateMessage),
    ("dataModelUpdate", DataModelUpdateMessage),
    ("userAction", UserActionMessage),
    ("deleteSurface", DeleteSurfaceMessage),
)


def validate_leniently(model: Type[BaseModel], payload: Mapping[str, Any]) -> BaseModel:
    """
    Validate ``payload``, dropping invalid optional fields instead of failing.

    Raises ValidationError only when a required field is missing or invalid.
    """
    data = dict(payload)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        bad_fields = {err["loc"][0] for err in exc.errors() if err.get("loc")}
        if not bad_fields:
            raise
        for name in bad_fields:
            data.pop(name, None)
        return model.model_validate(data)


def decode_message(raw: Any) -> Optional[Tuple[str, BaseModel]]:
    """Return ``(tag, message)`` or None for unknown or malformed messages."""
    if not isinstance(raw, Mapping):
        logger.warning("[%s] ignoring non-object message: %r", ERROR_MALFORMED_MESSAGE, type(raw).__name__)
        return None
    for tag, model in MESSAGE_VARIANTS:
        if tag not in raw:
            continue
        body = raw[tag]
        if not isinstance(body, Mapping):
            logger.warning("[%s] %s body must be an object", ERROR_MALFORMED_MESSAGE, tag)
            return None
        try:
            return tag, validate_leniently(model, body)
        except ValidationError as exc:
            logger.warning(
                "[%s] skipping %s message: %s",
                ERROR_MALFORMED_MESSAGE,
                tag,
                "; ".join(str(err.get("msg")) for err in exc.errors()),
            )
            return None
    logger.debug("ignoring unknown message variant with keys %s", sorted(str(key) for key in raw))
    return None


def decode_component(raw: Any) -> Optional[ComponentDef]:
    if not isinstance(raw, Mapping):
        return None
    try:
        return validate_leniently(ComponentDef, raw)
    except ValidationError:
        return None
