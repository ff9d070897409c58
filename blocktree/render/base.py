"""
Renderer registry.

Each output format keeps one registry that maps a block tag to the function
rendering that variant. Renderers register themselves with a decorator:

    @TEXT_RENDERERS.register("para", "list_item")
    def _text_para(node, options):
        return Fragment(node.sentences_text, descend=options.include_children)

A render function only renders its own node. When its fragment asks to
descend, the registry renders the children between the fragment's opening
and closing text.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blocktree.core.blocks import Block, RenderOptions


@dataclass(frozen=True)
class Fragment:
    """
    Rendering of a single node.

    Attributes:
        opening: Text before the node's children
        closing: Text after the node's children
        descend: Render the node's children in between
    """

    opening: str
    closing: str = ""
    descend: bool = False


RenderFunc = Callable[["Block", "RenderOptions"], Fragment]


class RendererRegistry:
    """Registry of per-tag render functions for a single output format."""

    def __init__(self, format_name: str, child_prefix: str = "") -> None:
        self.format_name = format_name
        self.child_prefix = child_prefix
        self._renderers: dict[str, RenderFunc] = {}

    def register(self, *tags: str) -> Callable[[RenderFunc], RenderFunc]:
        """Register a render function for one or more tags."""

        def decorator(func: RenderFunc) -> RenderFunc:
            for tag in tags:
                self._renderers[tag] = func
            return func

        return decorator

    def get_renderer(self, tag: str) -> RenderFunc:
        """
        Get the render function for a tag.

        Raises:
            LookupError: If no function is registered for the tag
        """
        renderer = self._renderers.get(tag)
        if renderer is None:
            raise LookupError(f"No {self.format_name} renderer for tag {tag!r}")
        return renderer

    def registered_tags(self) -> list[str]:
        return list(self._renderers.keys())

    def render(self, node: Block, options: RenderOptions) -> str:
        """
        Render a node and, where its fragments descend, its subtree.

        The tree is walked with an explicit stack, so nesting depth is not
        bounded by the interpreter's recursion limit.
        """
        parts: list[str] = []
        stack: list[str | tuple[Block, RenderOptions]] = [(node, options)]

        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
                continue

            current, current_options = item
            fragment = self.get_renderer(current.tag)(current, current_options)
            parts.append(fragment.opening)
            if fragment.closing:
                stack.append(fragment.closing)
            if fragment.descend:
                child_options = current_options.for_children()
                for child in reversed(current.children):
                    stack.append((child, child_options))
                    if self.child_prefix:
                        stack.append(self.child_prefix)

        return "".join(parts)
