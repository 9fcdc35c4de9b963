"""Ordered candidate-tag lookup shared by the field extractors."""

from collections.abc import Callable
from dataclasses import dataclass

from .document import Document, DocumentNode

NodePredicate = Callable[[DocumentNode], bool]


def _has_text(node: DocumentNode) -> bool:
    return bool(node.text_content.strip())


@dataclass(frozen=True)
class CandidateTagStrategy:
    """First candidate tag present in the document wins.

    Candidates are tried in list order; for each, only the first occurrence
    in document order is considered, and it must satisfy `predicate`
    (non-blank text by default). Values are never merged across tags.
    """

    tags: tuple[str, ...]
    predicate: NodePredicate = _has_text

    def find(self, document: Document) -> tuple[str, DocumentNode] | None:
        """Return (tag, node) of the winning candidate."""
        for tag in self.tags:
            node = document.first(tag)
            if node is not None and self.predicate(node):
                return tag, node
        return None

    def value(self, document: Document) -> str | None:
        """Trimmed text content of the winning candidate."""
        match = self.find(document)
        if match is None:
            return None
        return match[1].text_content.strip()

    def describe(self) -> str:
        return ", ".join(self.tags)
