"""Tree nodes handed from the parser to the reader."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AstNode:
    """One node of a parse tree.

    `tag` classifies the node (for example `expr|number|regex` or `expr|qexpr`),
    `contents` holds the matched text for leaves and `children` the ordered
    sub-nodes, including the bracket tokens of a list.
    """
    tag: str
    contents: str = ""
    children: tuple[AstNode, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        if not self.children:
            return f"{self.tag}: '{self.contents}'"
        return f"{self.tag} [{', '.join(str(c) for c in self.children)}]"
