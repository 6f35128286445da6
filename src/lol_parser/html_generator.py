"""HTML generator for LOLHTML documents.

Walks the AST produced by the parser and emits HTML text. Container nodes
(document, head, body, lists, paragraphs) are written one tag per line with
indentation; leaf nodes render to inline fragments, which either sit inside a
paragraph or list item, or get a line of their own at block level.
"""

from typing import Sequence

from lol_parser.parser import Node, NodeType

CONTAINER_TYPES = frozenset({
    NodeType.DOCUMENT,
    NodeType.HEAD,
    NodeType.BODY,
    NodeType.PARAGRAPH,
    NodeType.LIST,
    NodeType.LIST_ITEM,
})

# Text starting with one of these follows the previous inline fragment without a space
CLOSING_PUNCTUATION = frozenset(",.:;?!%)")


class HTMLGenerator:
    """Converts a LOLHTML AST into indented HTML."""

    def __init__(self, indent: str = "    "):
        """
        Initialize the HTML generator.

        Args:
            indent: String used for one level of indentation
        """
        self.indent = indent

    def generate(self, node: Node, level: int = 0) -> str:
        """Generate HTML for a node. Every node type has a _generate_<type> method."""
        method = getattr(self, f"_generate_{node.type.name.lower()}", None)
        if method is None:
            raise ValueError(f"No HTML rendering for node type {node.type.name}")
        return method(node, level)

    def sanitize_html(self, text: str) -> str:
        return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

    def sanitize_attribute(self, text: str) -> str:
        return self.sanitize_html(text.strip()).replace('"', "&quot;")

    def _pad(self, level: int) -> str:
        return self.indent * level

    def _generate_blocks(self, children: Sequence[Node], level: int) -> str:
        """Render children one per line at the given level."""
        lines = []
        for child in children:
            html = self.generate(child, level)
            if child.type in CONTAINER_TYPES:
                lines.append(html)
            elif html:
                lines.append(f"{self._pad(level)}{html}\n")
        return "".join(lines)

    def _generate_inline(self, children: Sequence[Node]) -> str:
        """
        Render children as inline fragments separated by single spaces. Text that
        starts with closing punctuation attaches directly to the fragment before it.
        """
        html = ""
        for child in children:
            part = self.generate(child)
            if not part:
                continue
            if html and not (child.type == NodeType.TEXT and part[0] in CLOSING_PUNCTUATION):
                html += " "
            html += part
        return html

    def _wrap_block(self, tag: str, node: Node, level: int) -> str:
        pad = self._pad(level)
        return f"{pad}<{tag}>\n{self._generate_blocks(node.children, level + 1)}{pad}</{tag}>\n"

    # Containers

    def _generate_document(self, node: Node, level: int) -> str:
        """Generate the complete page for the root document node."""
        return f"<html>\n{self._generate_blocks(node.children, level + 1)}</html>\n"

    def _generate_head(self, node: Node, level: int) -> str:
        return self._wrap_block("head", node, level)

    def _generate_body(self, node: Node, level: int) -> str:
        return self._wrap_block("body", node, level)

    def _generate_list(self, node: Node, level: int) -> str:
        return self._wrap_block("ul", node, level)

    def _generate_paragraph(self, node: Node, level: int) -> str:
        return f"{self._pad(level)}<p>{self._generate_inline(node.children)}</p>\n"

    def _generate_list_item(self, node: Node, level: int) -> str:
        return f"{self._pad(level)}<li>{self._generate_inline(node.children)}</li>\n"

    # Leaves

    def _generate_comment(self, node: Node, level: int = 0) -> str:
        # "--" may not appear inside an HTML comment. Matches do not overlap, so
        # runs of three or more dashes need repeated passes.
        text = node.value
        while '--' in text:
            text = text.replace('--', '- -')
        # The padding spaces keep a trailing "-" away from the closing "-->"
        return f"<!-- {text} -->"

    def _generate_title(self, node: Node, level: int = 0) -> str:
        return f"<title>{self.sanitize_html(node.value)}</title>"

    def _generate_bold(self, node: Node, level: int = 0) -> str:
        return f"<b>{self.sanitize_html(node.value)}</b>"

    def _generate_italics(self, node: Node, level: int = 0) -> str:
        return f"<i>{self.sanitize_html(node.value)}</i>"

    def _generate_newline(self, node: Node, level: int = 0) -> str:
        return "<br>"

    def _generate_audio(self, node: Node, level: int = 0) -> str:
        return f'<audio controls><source src="{self.sanitize_attribute(node.value)}"></audio>'

    def _generate_video(self, node: Node, level: int = 0) -> str:
        return f'<iframe src="{self.sanitize_attribute(node.value)}"></iframe>'

    def _generate_text(self, node: Node, level: int = 0) -> str:
        return self.sanitize_html(node.value)

    def _generate_var_def(self, node: Node, level: int = 0) -> str:
        """Variable definitions are recorded in the tree but produce no output."""
        return ""

    def _generate_var_use(self, node: Node, level: int = 0) -> str:
        """Variable uses are not interpolated."""
        return ""


def generate_html(ast: Node, **kwargs) -> str:
    """
    Convenience function to generate HTML from an AST.

    Args:
        ast: Root node of the AST
        **kwargs: Arguments to pass to HTMLGenerator constructor (indent)

    Returns:
        Generated HTML string
    """
    generator = HTMLGenerator(**kwargs)
    return generator.generate(ast)
