"""
Builders for outbound A2UI messages.

Agents and host bridges use these to emit well-formed protocol messages;
``build_render_sequence`` produces the usual beginRendering, surfaceUpdate
and dataModelUpdate trio for one surface.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from .data_model import encode_object_to_contents


def build_begin_rendering_message(
    *,
    surface_id: str,
    root: str,
    styles: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"surfaceId": str(surface_id), "root": str(root)}
    if styles:
        payload["styles"] = dict(styles)
    return {"beginRendering": payload}


def component_entry(component_id: str, kind: str, weight: Optional[float] = None, **props: Any) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"id": str(component_id), "component": {str(kind): dict(props)}}
    if weight is not None:
        entry["weight"] = weight
    return entry


def build_surface_update_message(
    *,
    surface_id: str,
    components: Iterable[Mapping[str, Any]],
) -> Dict[str, Any]:
    return {
        "surfaceUpdate": {
            "surfaceId": str(surface_id),
            "components": [dict(component) for component in components],
        }
    }


def build_data_model_update_message(
    *,
    surface_id: str,
    data: Mapping[str, Any],
    path: str = "/",
) -> Dict[str, Any]:
    return {
        "dataModelUpdate": {
            "surfaceId": str(surface_id),
            "path": str(path or "/"),
            "contents": encode_object_to_contents(data),
        }
    }


def build_delete_surface_message(*, surface_id: str) -> Dict[str, Any]:
    return {"deleteSurface": {"surfaceId": str(surface_id)}}


def build_user_action_message(
    *,
    name: str,
    surface_id: Optional[str] = None,
    source_component_id: Optional[str] = None,
    context: Optional[List[Mapping[str, Any]]] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"name": str(name), "context": [dict(item) for item in context or []]}
    if surface_id:
        payload["surfaceId"] = str(surface_id)
    if source_component_id:
        payload["sourceComponentId"] = str(source_component_id)
    return {"userAction": payload}


def build_render_sequence(
    *,
    surface_id: str,
    root: str,
    components: Iterable[Mapping[str, Any]],
    data: Optional[Mapping[str, Any]] = None,
    styles: Optional[Mapping[str, Any]] = None,
) -> List[Dict[str, Any]]:
    sequence: List[Dict[str, Any]] = [
        build_begin_rendering_message(surface_id=surface_id, root=root, styles=styles),
        build_surface_update_message(surface_id=surface_id, components=components),
    ]
    if data:
        sequence.append(build_data_model_update_message(surface_id=surface_id, data=data))
    return sequence
