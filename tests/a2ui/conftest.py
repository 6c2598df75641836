import pytest

from a2ui_surface import A2UIProcessor, SurfaceRenderer
from a2ui_surface.settings import reset_renderer_settings


@pytest.fixture(autouse=True)
def _reset_renderer_settings():
    reset_renderer_settings()
    yield
    reset_renderer_settings()


@pytest.fixture
def processor():
    return A2UIProcessor()


@pytest.fixture
def renderer():
    return SurfaceRenderer()


@pytest.fixture
def render(processor, renderer):
    """Apply messages, then render one surface and return its root node."""
    def _render(messages, surface_id="s1", on_action=None):
        processor.process_messages(messages)
        surface_node = renderer.render_surface(processor.get_surface(surface_id), on_action)
        assert surface_node.kind == "surface"
        return surface_node.children[0] if surface_node.children else None
    return _render
