"""
Tests for component resolution into RenderNode trees.

Tests cover:
- Text, Button, layout and decoration kinds
- List and Column templates
- Not-found, unknown-kind, cycle and depth-limit handling
- Per-component error containment
"""

import pytest

from a2ui_surface import (
    ComponentResolver,
    NodePrimitives,
    SurfaceRenderer,
    configure_renderer,
    get_component_catalog,
    parse_component,
    supported_component_types,
)
from a2ui_surface.lifecycle_messages import build_data_model_update_message

from a2ui_builders import begin, comp, literal, update


# ============================================================
# Leaf components
# ============================================================

class TestTextAndButton:

    def test_heading_text(self, render):
        node = render([begin(), update(comp("root", "Text", text=literal("Hello"), usageHint="h1"))])
        assert node.kind == "text"
        assert node.text == "Hello"
        assert node.props == {"variant": "h1", "heading_level": 1}

    def test_unknown_usage_hint_falls_back_to_body(self, render):
        node = render([begin(), update(comp("root", "Text", text=literal("x"), usageHint="h9"))])
        assert node.props == {"variant": "body"}

    def test_text_bound_to_data_path(self, render):
        node = render(
            [
                begin(),
                update(comp("root", "Text", text={"path": "/user/name"})),
                build_data_model_update_message(surface_id="s1", data={"user": {"name": "Ada"}}),
            ]
        )
        assert node.text == "Ada"

    def test_button_label_from_text_child(self, render):
        node = render(
            [
                begin(),
                update(
                    comp("root", "Button", child="label", primary=True),
                    comp("label", "Text", text=literal("Save")),
                ),
            ]
        )
        assert node.kind == "button"
        assert node.text == "Save"
        assert node.props == {"primary": True}

    @pytest.mark.parametrize("child", [None, "missing", "icon"])
    def test_button_default_label(self, render, child):
        props = {"child": child} if child else {}
        node = render([begin(), update(comp("root", "Button", **props), comp("icon", "Icon"))])
        assert node.text == "Button"
        assert node.props == {"primary": False}

    def test_button_activation_reports_action(self, render):
        calls = []
        node = render(
            [
                begin(),
                update(
                    comp(
                        "root",
                        "Button",
                        child="label",
                        action={"name": "open", "context": [{"key": "file", "value": {"path": "/name"}}]},
                    ),
                    comp("label", "Text", text=literal("Open")),
                ),
            ],
            on_action=lambda name, context: calls.append((name, context)),
        )
        assert node.actionable
        node.activate()
        assert calls == [("open", [{"key": "file", "value": {"path": "/name"}}])]

    def test_button_without_callback_is_inert(self, render):
        node = render([begin(), update(comp("root", "Button", action={"name": "open"}))])
        assert not node.actionable
        node.activate()

    def test_icon_divider_spacer_defaults(self, render):
        node = render(
            [
                begin(),
                update(
                    comp("root", "Row", children={"explicitList": ["i", "d", "sp"]}),
                    comp("i", "Icon", icon="no-such-icon"),
                    comp("d", "Divider"),
                    comp("sp", "Spacer", size="huge"),
                ),
            ]
        )
        icon, divider, spacer = node.children
        assert icon.text == "●"
        assert icon.props == {"name": "no-such-icon", "pixel_size": 24}
        assert divider.props == {"orientation": "horizontal"}
        assert spacer.props == {"size": "medium", "units": 2}

    def test_icon_size(self, render):
        node = render([begin(), update(comp("root", "Icon", icon="check", size="large"))])
        assert node.text == "✓"
        assert node.props["pixel_size"] == 32


# ============================================================
# Layout components
# ============================================================

class TestLayout:

    def test_column_explicit_children_in_order(self, render):
        node = render(
            [
                begin(),
                update(
                    comp("root", "Column", children={"explicitList": ["a", "missing"]}, alignment="center"),
                    comp("a", "Text", text=literal("A")),
                ),
            ]
        )
        assert node.kind == "column"
        assert node.props == {"alignment": "center"}
        assert [child.kind for child in node.children] == ["text", "not_found"]
        assert node.children[1].text == "Component not found: missing"

    def test_layout_defaults(self, render):
        node = render(
            [
                begin(),
                update(
                    comp("root", "Column", children={"explicitList": ["row"]}, alignment="diagonal"),
                    comp("row", "Row", distribution="everywhere"),
                ),
            ]
        )
        assert node.props == {"alignment": "start"}
        row = node.children[0]
        assert row.props == {"distribution": "start"}
        assert row.children == []

    def test_row_ignores_template(self, render):
        node = render(
            [
                begin(),
                update(
                    comp("root", "Row", children={"template": {"componentId": "t", "dataBinding": "/items"}}),
                    comp("t", "Text", text=literal("T")),
                ),
                build_data_model_update_message(surface_id="s1", data={"items": [1, 2]}),
            ]
        )
        assert node.children == []

    def test_card_with_and_without_child(self, render):
        node = render(
            [
                begin(),
                update(
                    comp("root", "Column", children={"explicitList": ["full", "empty"]}),
                    comp("full", "Card", child="t"),
                    comp("empty", "Card"),
                    comp("t", "Text", text=literal("inside")),
                ),
            ]
        )
        full, empty = node.children
        assert full.children[0].text == "inside"
        assert empty.children == []

    def test_unknown_kinds_render_nothing(self, render):
        node = render(
            [
                begin(),
                update(
                    comp("root", "Column", children={"explicitList": ["foo", "t"]}),
                    comp("foo", "Foo", whatever=True),
                    comp("t", "Text", text=literal("kept")),
                ),
            ]
        )
        assert [child.kind for child in node.children] == ["text"]

    def test_unknown_root_renders_empty_surface(self, render):
        assert render([begin(), update(comp("root", "Foo"))]) is None


# ============================================================
# Templates
# ============================================================

class TestTemplates:

    def test_list_template_scopes_each_item(self, render):
        node = render(
            [
                begin(),
                update(
                    comp("root", "List", children={"template": {"componentId": "item", "dataBinding": "/files"}}),
                    comp("item", "Text", text={"path": "/name"}),
                ),
                build_data_model_update_message(
                    surface_id="s1", data={"files": [{"name": "a.txt"}, {"name": "b.txt"}]}
                ),
            ]
        )
        assert node.kind == "list"
        assert [child.text for child in node.children] == ["a.txt", "b.txt"]

    def test_list_template_over_mapping_uses_values(self, render):
        node = render(
            [
                begin(),
                update(
                    comp("root", "List", children={"template": {"componentId": "item", "dataBinding": "/byId"}}),
                    comp("item", "Text", text={"path": "/name"}),
                ),
                {"dataModelUpdate": {"surfaceId": "s1", "value": {"byId": {"x": {"name": "X"}, "y": {"name": "Y"}}}}},
            ]
        )
        assert [child.text for child in node.children] == ["X", "Y"]

    @pytest.mark.parametrize("bound", ["text", 5, None])
    def test_list_template_over_non_collection_renders_nothing(self, render, bound):
        node = render(
            [
                begin(),
                update(
                    comp("root", "List", children={"template": {"componentId": "item", "dataBinding": "/files"}}),
                    comp("item", "Text", text=literal("never")),
                ),
                {"dataModelUpdate": {"surfaceId": "s1", "value": {"files": bound}}},
            ]
        )
        assert node is None

    def test_list_template_over_empty_sequence_is_empty_list(self, render):
        node = render(
            [
                begin(),
                update(
                    comp("root", "List", children={"template": {"componentId": "item", "dataBinding": "/files"}}),
                    comp("item", "Text", text=literal("never")),
                ),
                {"dataModelUpdate": {"surfaceId": "s1", "value": {"files": []}}},
            ]
        )
        assert node.kind == "list"
        assert node.children == []

    @pytest.mark.parametrize(
        "children",
        [{"explicitList": ["t"]}, {"template": {"componentId": "t"}}, None],
    )
    def test_list_without_bound_template_renders_nothing(self, render, children):
        props = {"children": children} if children else {}
        node = render([begin(), update(comp("root", "List", **props), comp("t", "Divider"))])
        assert node is None

    def test_column_template_synthesizes_ids(self, render):
        node = render(
            [
                begin(),
                update(
                    comp("root", "Column", children={"template": {"componentId": "row", "dataBinding": "/rows"}}),
                    comp("row-x", "Text", text=literal("first")),
                    comp("row-z", "Text", text=literal("unused")),
                ),
                {"dataModelUpdate": {"surfaceId": "s1", "value": {"rows": {"x": 1, "y": 2}}}},
            ]
        )
        assert [(child.kind, child.component_id) for child in node.children] == [
            ("text", "row-x"),
            ("not_found", "row-y"),
        ]

    def test_column_template_over_sequence_uses_indices(self, render):
        node = render(
            [
                begin(),
                update(
                    comp("root", "Column", children={"template": {"componentId": "row", "dataBinding": "/rows"}}),
                    comp("row-0", "Text", text={"path": "/title"}),
                    comp("row-1", "Divider"),
                ),
                {"dataModelUpdate": {"surfaceId": "s1", "value": {"rows": ["a", "b"], "title": "Top"}}},
            ]
        )
        assert [child.kind for child in node.children] == ["text", "divider"]
        # Column templates keep the enclosing data scope.
        assert node.children[0].text == "Top"


# ============================================================
# Failures
# ============================================================

class _ExplodingPrimitives(NodePrimitives):
    def button(self, component_id, label, primary, on_activate):
        if label == "Boom":
            raise RuntimeError("host widget failed")
        return super().button(component_id, label, primary, on_activate)


class TestFailureContainment:

    def test_malformed_props_become_error_node(self, render):
        node = render(
            [
                begin(),
                update(
                    comp("root", "Column", children={"explicitList": ["bad", "ok"]}),
                    comp("bad", "Button", action="not-an-object"),
                    comp("ok", "Text", text=literal("still here")),
                ),
            ]
        )
        bad, ok = node.children
        assert bad.kind == "error"
        assert bad.text == "Error rendering Button"
        assert bad.props["component_kind"] == "Button"
        assert ok.text == "still here"

    def test_non_object_props_become_error_node(self, render):
        node = render([begin(), update({"id": "root", "component": {"Text": "hello"}})])
        assert node.kind == "error"
        assert "must be an object" in node.props["message"]

    def test_host_primitive_failure_is_contained(self, processor):
        processor.process_messages(
            [
                begin(),
                update(
                    comp("root", "Column", children={"explicitList": ["boom", "fine"]}),
                    comp("boom", "Button", child="boom-label"),
                    comp("boom-label", "Text", text=literal("Boom")),
                    comp("fine", "Button", child="fine-label"),
                    comp("fine-label", "Text", text=literal("Fine")),
                ),
            ]
        )
        renderer = SurfaceRenderer(_ExplodingPrimitives())
        column = renderer.render_surface(processor.get_surface("s1")).children[0]
        boom, fine = column.children
        assert boom.kind == "error"
        assert boom.props["message"] == "host widget failed"
        assert fine.kind == "button"
        assert fine.text == "Fine"

    def test_cycle_becomes_cycle_node(self, render):
        node = render(
            [
                begin(root="a"),
                update(
                    comp("a", "Column", children={"explicitList": ["b"]}),
                    comp("b", "Card", child="a"),
                ),
            ]
        )
        card = node.children[0]
        cycle = card.children[0]
        assert cycle.kind == "cycle"
        assert cycle.component_id == "a"
        assert cycle.props == {"trail": ["a", "b"]}

    def test_self_reference(self, render):
        node = render([begin(), update(comp("root", "Card", child="root"))])
        assert node.children[0].kind == "cycle"

    def test_depth_limit(self, processor):
        processor.process_messages(
            [
                begin(root="a"),
                update(
                    comp("a", "Card", child="b"),
                    comp("b", "Card", child="c"),
                    comp("c", "Card", child="d"),
                    comp("d", "Text", text=literal("too deep")),
                ),
            ]
        )
        renderer = SurfaceRenderer(resolver=ComponentResolver(max_depth=3))
        tree = renderer.render_surface(processor.get_surface("s1"))
        deepest = tree.find("error")
        assert len(deepest) == 1
        assert deepest[0].component_id == "d"
        assert "maximum component depth (3)" in deepest[0].props["message"]

    def test_shared_child_is_not_a_cycle(self, render):
        node = render(
            [
                begin(),
                update(
                    comp("root", "Row", children={"explicitList": ["t", "t"]}),
                    comp("t", "Text", text=literal("twice")),
                ),
            ]
        )
        assert [child.text for child in node.children] == ["twice", "twice"]


# ============================================================
# Determinism
# ============================================================

class TestDeterminism:

    def test_rendering_twice_gives_equal_trees(self, processor, renderer):
        processor.process_messages(
            [
                begin(),
                update(
                    comp("root", "Column", children={"explicitList": ["h", "list"]}),
                    comp("h", "Text", text=literal("Files"), usageHint="h2"),
                    comp("list", "List", children={"template": {"componentId": "f", "dataBinding": "/files"}}),
                    comp("f", "Text", text={"path": "/name"}),
                ),
                build_data_model_update_message(surface_id="s1", data={"files": [{"name": "a"}, {"name": "b"}]}),
            ]
        )
        surface = processor.get_surface("s1")
        first = renderer.render_surface(surface)
        second = renderer.render_surface(surface)
        assert first.to_dict() == second.to_dict()
        assert first == second


# ============================================================
# Catalog
# ============================================================

class TestComponentCatalog:

    def test_supported_types(self):
        assert supported_component_types() == {
            "Text", "Button", "Column", "Row", "Card", "List", "Icon", "Divider", "Spacer",
        }

    def test_catalog_schemas(self):
        catalog = get_component_catalog()
        assert catalog["version"] == "0.8"
        assert set(catalog["components"]) == supported_component_types()
        assert "usageHint" in catalog["components"]["Text"]["properties"]

    def test_parse_unknown_kind_keeps_props(self):
        component = parse_component("Chart", {"series": [1, 2], "my-key": True})
        assert component.kind == "Chart"
        assert component.model_extra == {"series": [1, 2], "my-key": True}


# ============================================================
# Render budget
# ============================================================

def _fan_out(levels):
    """Each level lists the next one twice; the last level is a Divider."""
    components = [
        comp(f"n{level}", "Row", children={"explicitList": [f"n{level + 1}", f"n{level + 1}"]})
        for level in range(levels)
    ]
    components.append(comp(f"n{levels}", "Divider"))
    return [begin(root="n0"), update(*components)]


class TestRenderBudget:

    def test_small_fan_out_stops_at_limit(self, processor):
        processor.process_messages(_fan_out(2))
        renderer = SurfaceRenderer(resolver=ComponentResolver(max_nodes=5))
        tree = renderer.render_surface(processor.get_surface("s1"))
        # n0, n1, n2, n2, n1 fit; the last two n2 leaves are over the limit.
        assert len(tree.find("divider")) == 2
        errors = tree.find("error")
        assert [node.component_id for node in errors] == ["n2", "n2"]
        assert "maximum components per render (5)" in errors[0].props["message"]

    def test_deep_fan_out_is_bounded(self, processor):
        processor.process_messages(_fan_out(22))
        renderer = SurfaceRenderer(resolver=ComponentResolver(max_nodes=200))
        tree = renderer.render_surface(processor.get_surface("s1"))
        assert len(tree.find("divider")) + len(tree.find("row")) <= 200
        assert tree.find("error")

    def test_limit_from_settings(self, processor):
        configure_renderer({"renderer_config": {"max_nodes": 3}})
        processor.process_messages(_fan_out(1))
        tree = SurfaceRenderer().render_surface(processor.get_surface("s1"))
        assert len(tree.find("divider")) == 2
        processor.process_messages(_fan_out(2))
        tree = SurfaceRenderer().render_surface(processor.get_surface("s1"))
        assert tree.find("error")

    def test_each_render_pass_gets_a_fresh_budget(self, processor):
        processor.process_messages(_fan_out(2))
        renderer = SurfaceRenderer(resolver=ComponentResolver(max_nodes=7))
        surface = processor.get_surface("s1")
        for _ in range(3):
            tree = renderer.render_surface(surface)
            assert len(tree.find("divider")) == 4
            assert tree.find("error") == []


# ============================================================
# Literal coercion
# ============================================================

class TestLiteralCoercion:

    @pytest.mark.parametrize("value,expected", [(5, "5"), (2.5, "2.5"), (3.0, "3"), (True, "true")])
    def test_scalar_literal_string_renders_as_text(self, render, value, expected):
        node = render([begin(), update(comp("root", "Text", text={"literalString": value}))])
        assert node.kind == "text"
        assert node.text == expected

    def test_structured_literal_string_is_still_an_error(self, render):
        node = render([begin(), update(comp("root", "Text", text={"literalString": {"nested": 1}}))])
        assert node.kind == "error"
