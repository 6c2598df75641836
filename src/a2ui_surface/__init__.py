"""
a2ui_surface: interpreter and renderer for the A2UI agent-to-UI protocol.
"""

from .binding import resolve_action_context, resolve_path, resolve_text, resolve_value
from .components import get_component_catalog, parse_component, supported_component_types
from .context import RenderBudget, RenderContext
from .error_codes import A2UIError, ComponentResolutionError, ConfigError
from .lifecycle_messages import (
    build_begin_rendering_message,
    build_data_model_update_message,
    build_delete_surface_message,
    build_render_sequence,
    build_surface_update_message,
    build_user_action_message,
    component_entry,
)
from .processor import A2UIProcessor
from .protocol import ComponentDef, decode_message
from .render_tree import NodePrimitives, RenderNode, RenderPrimitives
from .renderer import SurfaceRenderer
from .resolver import ComponentResolver
from .session import SessionState, SurfaceSession, snapshot_surface, surface_summaries
from .settings import RendererSettings, configure_renderer, get_renderer_settings
from .surface import ComponentRegistry, Surface
from .templates import TemplateChild, expand_column_template, expand_list_template
from .text_renderer import render_text

__all__ = [
    "A2UIError",
    "A2UIProcessor",
    "ComponentDef",
    "ComponentRegistry",
    "ComponentResolutionError",
    "ComponentResolver",
    "ConfigError",
    "NodePrimitives",
    "RenderBudget",
    "RenderContext",
    "RenderNode",
    "RenderPrimitives",
    "RendererSettings",
    "SessionState",
    "Surface",
    "SurfaceRenderer",
    "SurfaceSession",
    "TemplateChild",
    "build_begin_rendering_message",
    "build_data_model_update_message",
    "build_delete_surface_message",
    "build_render_sequence",
    "build_surface_update_message",
    "build_user_action_message",
    "component_entry",
    "configure_renderer",
    "decode_message",
    "expand_column_template",
    "expand_list_template",
    "get_component_catalog",
    "get_renderer_settings",
    "parse_component",
    "render_text",
    "resolve_action_context",
    "resolve_path",
    "resolve_text",
    "resolve_value",
    "snapshot_surface",
    "supported_component_types",
    "surface_summaries",
]
