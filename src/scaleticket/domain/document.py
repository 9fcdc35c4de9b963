"""Navigable XML document tree."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from xml.etree import ElementTree as ET


class DocumentMalformedError(ValueError):
    """Raised when raw bytes cannot be turned into a document tree."""


def _local_name(tag: str) -> str:
    """Strip the namespace from an ElementTree tag: '{ns}infQ' -> 'infQ'."""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


@dataclass
class DocumentNode:
    """Element of a parsed fiscal document.

    Tags are local names: CTe and NFe documents declare a default namespace
    that plays no part in field lookup.
    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    text: str = ""
    tail: str = ""
    children: list["DocumentNode"] = field(default_factory=list)

    @property
    def text_content(self) -> str:
        """Concatenated text of this node and all its descendants."""
        parts = [self.text]
        for child in self.children:
            parts.append(child.text_content)
            parts.append(child.tail)
        return "".join(parts)

    def get(self, name: str) -> str | None:
        """Attribute value by local name."""
        return self.attributes.get(name)

    def iter(self, tag: str) -> Iterator["DocumentNode"]:
        """Yield descendants named `tag`, depth-first in document order."""
        for child in self.children:
            if child.tag == tag:
                yield child
            yield from child.iter(tag)

    def first(self, tag: str) -> "DocumentNode | None":
        """First descendant named `tag`, depth-first in document order."""
        return next(self.iter(tag), None)

    def child(self, tag: str) -> "DocumentNode | None":
        """First direct child named `tag`."""
        for child in self.children:
            if child.tag == tag:
                return child
        return None


@dataclass
class Document:
    """Parsed document wrapper; searches cover the root element as well."""

    root: DocumentNode

    def iter(self, tag: str) -> Iterator[DocumentNode]:
        if self.root.tag == tag:
            yield self.root
        yield from self.root.iter(tag)

    def first(self, tag: str) -> DocumentNode | None:
        return next(self.iter(tag), None)

    def at_path(self, path: str) -> DocumentNode | None:
        """Resolve a strict '/a/b/c' path from the root.

        The root must be named after the first segment; every further segment
        takes the first child with that name. Any absent step fails the path.
        """
        segments = [s for s in path.split("/") if s]
        if not segments or self.root.tag != segments[0]:
            return None
        node = self.root
        for segment in segments[1:]:
            node = node.child(segment)
            if node is None:
                return None
        return node


def _convert(element: ET.Element) -> DocumentNode:
    return DocumentNode(
        tag=_local_name(element.tag),
        attributes={_local_name(k): v for k, v in element.attrib.items()},
        text=element.text or "",
        tail=element.tail or "",
        children=[_convert(child) for child in element],
    )


def load_document(data: bytes) -> Document:
    """Parse raw XML bytes into a Document.

    Raises DocumentMalformedError for anything that is not well-formed XML.
    """
    try:
        root = ET.fromstring(data)
        root_node = _convert(root)
    except (ET.ParseError, ValueError, TypeError, RecursionError) as e:
        raise DocumentMalformedError(f"invalid XML: {e}") from e

    root_node.tail = ""
    return Document(root=root_node)
