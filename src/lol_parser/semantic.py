"""Semantic checking stage.

The analyzer either hands the tree on unchanged or rejects it. By default no
rule is enforced. With strict_variables enabled it rejects a LEMME SEE of a
variable that no earlier I HAZ defined.
"""

from typing import Set

from common.base.logging_config import get_logger
from lol_parser.errors import SemanticError
from lol_parser.parser import Node, NodeType

logger = get_logger(__name__)


class Analyzer:
    """Validates a parsed document before HTML generation."""

    def __init__(self, document: Node, strict_variables: bool = False):
        self.document = document
        self.strict_variables = strict_variables

    def check(self) -> Node:
        """
        Run the enabled checks.

        :return: The same document node that was passed in
        :raises SemanticError: if a check fails
        """
        if self.strict_variables:
            defined: Set[str] = set()
            self._check_variables(self.document, defined)
            logger.debug(f"Variable check passed ({len(defined)} variables defined)")
        return self.document

    def _check_variables(self, node: Node, defined: Set[str]) -> None:
        # Definitions are visible from their position to the end of the document.
        for child in node.children:
            if child.type == NodeType.VAR_DEF:
                defined.add(child.name)
            elif child.type == NodeType.VAR_USE:
                if child.name not in defined:
                    raise SemanticError(f"variable '{child.name}' used before it was defined")
            else:
                self._check_variables(child, defined)


def analyze(document: Node, **kwargs) -> Node:
    """Convenience function running the Analyzer over a document."""
    return Analyzer(document, **kwargs).check()
