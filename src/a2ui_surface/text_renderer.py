"""Plain-text rendering of ``RenderNode`` trees for terminals and logs."""
from __future__ import annotations

from typing import Callable, Dict, List, Optional

from .render_tree import RenderNode

DEFAULT_WIDTH = 48
_HEADING_MARKS = {"h1": "# ", "h2": "## ", "h3": "### ", "h4": "#### "}


def _text_lines(node: RenderNode, width: int) -> List[str]:
    variant = node.props.get("variant", "body")
    lines = (node.text or "").splitlines() or [""]
    if variant in _HEADING_MARKS:
        return [_HEADING_MARKS[variant] + line for line in lines]
    if variant == "caption":
        return [f"({line})" if line else "" for line in lines]
    return lines


def _button_lines(node: RenderNode, width: int) -> List[str]:
    label = node.text or ""
    if node.props.get("primary"):
        return [f"[[ {label} ]]"]
    return [f"[ {label} ]"]


def _column_lines(node: RenderNode, width: int) -> List[str]:
    lines: List[str] = []
    for child in node.children:
        lines.extend(_lines(child, width))
    return lines


def _row_lines(node: RenderNode, width: int) -> List[str]:
    rendered = [_lines(child, width) for child in node.children]
    if all(len(block) == 1 for block in rendered):
        return ["  ".join(block[0] for block in rendered)] if rendered else []
    lines: List[str] = []
    for block in rendered:
        lines.extend(block)
    return lines


def _card_lines(node: RenderNode, width: int) -> List[str]:
    inner: List[str] = []
    for child in node.children:
        inner.extend(_lines(child, max(8, width - 4)))
    span = max([len(line) for line in inner] + [8])
    border = "+" + "-" * (span + 2) + "+"
    return [border] + [f"| {line.ljust(span)} |" for line in inner] + [border]


def _list_lines(node: RenderNode, width: int) -> List[str]:
    lines: List[str] = []
    for child in node.children:
        block = _lines(child, max(8, width - 2))
        for index, line in enumerate(block):
            lines.append(("- " if index == 0 else "  ") + line)
    return lines


def _divider_lines(node: RenderNode, width: int) -> List[str]:
    if node.props.get("orientation") == "vertical":
        return ["|"]
    return ["-" * width]


def _surface_lines(node: RenderNode, width: int) -> List[str]:
    lines = [f"== surface {node.component_id} =="]
    for child in node.children:
        lines.extend("  " + line for line in _lines(child, max(8, width - 2)))
    return lines


def _container_lines(node: RenderNode, width: int) -> List[str]:
    lines: List[str] = []
    for index, child in enumerate(node.children):
        if index:
            lines.append("")
        lines.extend(_lines(child, width))
    return lines


_RENDERERS: Dict[str, Callable[[RenderNode, int], List[str]]] = {
    "text": _text_lines,
    "button": _button_lines,
    "column": _column_lines,
    "row": _row_lines,
    "card": _card_lines,
    "list": _list_lines,
    "icon": lambda node, width: [node.text or ""],
    "divider": _divider_lines,
    "spacer": lambda node, width: [""] * int(node.props.get("units", 1)),
    "not_found": lambda node, width: [f"[!] {node.text}"],
    "error": lambda node, width: [f"[x] {node.text}"],
    "cycle": lambda node, width: [f"[!] {node.text}"],
    "missing_root": lambda node, width: [f"({node.text})"],
    "surface": _surface_lines,
    "container": _container_lines,
}


def _lines(node: RenderNode, width: int) -> List[str]:
    renderer = _RENDERERS.get(node.kind)
    if renderer is None:
        return [node.text] if node.text else []
    return renderer(node, width)


def render_text(node: Optional[RenderNode], *, width: int = DEFAULT_WIDTH) -> str:
    if node is None:
        return ""
    return "\n".join(_lines(node, max(8, int(width))))
