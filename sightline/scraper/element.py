"""Values held by the nodes of a parsed HTML document tree."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


@dataclass
class Comment:
    """An HTML comment."""

    comment: str

    def __str__(self) -> str:
        return self.comment

    def __repr__(self) -> str:
        return f"<!-- {_quote(self.comment)} -->"


@dataclass
class Doctype:
    """A document type declaration."""

    name: str = ""
    public_id: str = ""
    system_id: str = ""

    def __repr__(self) -> str:
        return (
            f"<!DOCTYPE {self.name} PUBLIC "
            f"{_quote(self.public_id)} {_quote(self.system_id)}>"
        )


@dataclass
class Element:
    """An HTML element with its id, classes and attributes."""

    name: str
    id: str | None = None
    classes: frozenset[str] = frozenset()
    attrs: dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(
        cls, name: str, attrs: Mapping[str, str] | Iterable[tuple[str, str]]
    ) -> Element:
        """Build an element, picking out its id and classes from `attrs`."""
        pairs = list(attrs.items()) if isinstance(attrs, Mapping) else list(attrs)
        element_id = next((value for key, value in pairs if key == "id"), None)
        class_value = next((value for key, value in pairs if key == "class"), None)
        classes = frozenset(class_value.split()) if class_value is not None else frozenset()
        return cls(name=name, id=element_id, classes=classes, attrs=dict(pairs))

    def __repr__(self) -> str:
        parts = "".join(f" {key}={_quote(value)}" for key, value in self.attrs.items())
        return f"<{self.name}{parts}>"


@dataclass
class Text:
    """A run of text."""

    text: str

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return _quote(self.text)


@dataclass
class ProcessingInstruction:
    """An HTML processing instruction."""

    target: str
    data: str

    def __str__(self) -> str:
        return self.data

    def __repr__(self) -> str:
        return _quote(self.data)


class NodeKind(Enum):
    """The kinds of node a document tree can hold."""

    DOCUMENT = "document"
    FRAGMENT = "fragment"
    DOCTYPE = "doctype"
    COMMENT = "comment"
    TEXT = "text"
    ELEMENT = "element"
    PROCESSING_INSTRUCTION = "processing_instruction"


_PAYLOAD_TYPES: dict[NodeKind, type] = {
    NodeKind.DOCTYPE: Doctype,
    NodeKind.COMMENT: Comment,
    NodeKind.TEXT: Text,
    NodeKind.ELEMENT: Element,
    NodeKind.PROCESSING_INSTRUCTION: ProcessingInstruction,
}

_LABELS: dict[NodeKind, str] = {
    NodeKind.DOCUMENT: "Document",
    NodeKind.FRAGMENT: "Fragment",
    NodeKind.DOCTYPE: "Doctype",
    NodeKind.COMMENT: "Comment",
    NodeKind.TEXT: "Text",
    NodeKind.ELEMENT: "Element",
    NodeKind.PROCESSING_INSTRUCTION: "ProcessingInstruction",
}

Payload = Union[Doctype, Comment, Text, Element, ProcessingInstruction, None]


@dataclass
class Node:
    """An HTML node: a kind plus the value that kind carries."""

    kind: NodeKind
    data: Payload = None

    def __post_init__(self) -> None:
        expected = _PAYLOAD_TYPES.get(self.kind)
        if expected is None:
            if self.data is not None:
                raise TypeError(f"{self.kind.name} nodes carry no data")
        elif not isinstance(self.data, expected):
            raise TypeError(
                f"{self.kind.name} nodes need a {expected.__name__}, "
                f"got {type(self.data).__name__}"
            )

    def _payload(self, kind: NodeKind) -> Payload:
        return self.data if self.kind is kind else None

    def is_document(self) -> bool:
        return self.kind is NodeKind.DOCUMENT

    def is_fragment(self) -> bool:
        return self.kind is NodeKind.FRAGMENT

    def is_doctype(self) -> bool:
        return self.kind is NodeKind.DOCTYPE

    def is_comment(self) -> bool:
        return self.kind is NodeKind.COMMENT

    def is_text(self) -> bool:
        return self.kind is NodeKind.TEXT

    def is_element(self) -> bool:
        return self.kind is NodeKind.ELEMENT

    def as_doctype(self) -> Doctype | None:
        return self._payload(NodeKind.DOCTYPE)

    def as_comment(self) -> Comment | None:
        return self._payload(NodeKind.COMMENT)

    def as_text(self) -> Text | None:
        return self._payload(NodeKind.TEXT)

    def as_element(self) -> Element | None:
        return self._payload(NodeKind.ELEMENT)

    def as_processing_instruction(self) -> ProcessingInstruction | None:
        return self._payload(NodeKind.PROCESSING_INSTRUCTION)

    def __repr__(self) -> str:
        label = _LABELS[self.kind]
        if self.data is None:
            return label
        return f"{label}({self.data!r})"