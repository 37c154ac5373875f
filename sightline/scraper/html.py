"""A parsed HTML document held as a tree of nodes."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import html5lib
from html5lib.constants import E, namespaces
from html5lib.treebuilders import base

from sightline.scraper.element import (
    Comment,
    Doctype,
    Element,
    Node,
    NodeKind,
    Text,
)


class TreeNode:
    """A node of the document tree: a value with a parent and ordered children."""

    def __init__(self, value: Node, namespace: str | None = None) -> None:
        self.value = value
        self.namespace = namespace
        self.parent: TreeNode | None = None
        self.children: list[TreeNode] = []

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.children)

    def __repr__(self) -> str:
        return f"TreeNode({self.value!r}, children={len(self.children)})"

    def append(self, child: TreeNode) -> TreeNode:
        """Move `child` to the end of this node's children."""
        child.detach()
        child.parent = self
        self.children.append(child)
        return child

    def append_text(self, text: str) -> None:
        """Append text, merging it into a trailing text node.

        Text made only of whitespace is collapsed to a single space.
        """
        if not text.strip():
            text = " "
        last = self.children[-1] if self.children else None
        last_text = last.value.as_text() if last is not None else None
        if last_text is not None:
            last_text.text += text
        else:
            self.append(type(self)(Node(NodeKind.TEXT, Text(text))))

    def detach(self) -> None:
        """Remove this node from its parent, if any."""
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def has_children(self) -> bool:
        return bool(self.children)


def _attr_name(key: str | tuple) -> str:
    if isinstance(key, tuple):
        prefix, local = key[0], key[1]
        return f"{prefix}:{local}" if prefix else local
    return key


class _SinkNode(TreeNode):
    """Tree node that also speaks the node protocol of the html5lib tree builder."""

    def __init__(self, value: Node, namespace: str | None = None) -> None:
        super().__init__(value, namespace)
        self._flags: list = []

    @property
    def name(self) -> str | None:
        element = self.value.as_element()
        return element.name if element is not None else None

    @property
    def nameTuple(self) -> tuple[str, str | None]:  # noqa: N802
        return (self.namespace or namespaces["html"], self.name)

    @property
    def attributes(self) -> dict[str, str]:
        element = self.value.as_element()
        return element.attrs if element is not None else {}

    @attributes.setter
    def attributes(self, attrs: dict) -> None:
        element = self.value.as_element()
        if element is not None:
            pairs = [(_attr_name(key), value) for key, value in attrs.items()]
            self.value.data = Element.create(element.name, pairs)

    @property
    def childNodes(self) -> list[TreeNode]:  # noqa: N802
        return self.children

    def appendChild(self, node: TreeNode) -> None:  # noqa: N802
        self.append(node)

    def insertText(self, data: str, insertBefore: TreeNode | None = None) -> None:  # noqa: N802,N803
        if insertBefore is None:
            self.append_text(data)
            return
        index = self.children.index(insertBefore)
        previous = self.children[index - 1] if index > 0 else None
        previous_text = previous.value.as_text() if previous is not None else None
        if previous_text is not None:
            previous_text.text += data
        else:
            node = _SinkNode(Node(NodeKind.TEXT, Text(data)))
            node.parent = self
            self.children.insert(index, node)

    def insertBefore(self, node: TreeNode, refNode: TreeNode) -> None:  # noqa: N802,N803
        node.detach()
        node.parent = self
        self.children.insert(self.children.index(refNode), node)

    def removeChild(self, node: TreeNode) -> None:  # noqa: N802
        node.detach()

    def reparentChildren(self, newParent: TreeNode) -> None:  # noqa: N802,N803
        for child in list(self.children):
            newParent.append(child)

    def cloneNode(self) -> _SinkNode:  # noqa: N802
        element = self.value.as_element()
        if element is None:
            return _SinkNode(Node(self.value.kind, self.value.data), self.namespace)
        copy = Element.create(element.name, dict(element.attrs))
        return _SinkNode(Node(NodeKind.ELEMENT, copy), self.namespace)

    def hasContent(self) -> bool:  # noqa: N802
        return self.has_children()


def _new_document() -> _SinkNode:
    return _SinkNode(Node(NodeKind.DOCUMENT))


def _new_fragment() -> _SinkNode:
    return _SinkNode(Node(NodeKind.FRAGMENT))


def _new_element(name: str, namespace: str | None = None) -> _SinkNode:
    return _SinkNode(Node(NodeKind.ELEMENT, Element.create(name, {})), namespace)


def _new_comment(data: str) -> _SinkNode:
    return _SinkNode(Node(NodeKind.COMMENT, Comment(data)))


def _new_doctype(
    name: str | None, public_id: str | None = None, system_id: str | None = None
) -> _SinkNode:
    doctype = Doctype(name or "", public_id or "", system_id or "")
    return _SinkNode(Node(NodeKind.DOCTYPE, doctype))


class _TreeBuilder(base.TreeBuilder):
    documentClass = staticmethod(_new_document)
    fragmentClass = staticmethod(_new_fragment)
    elementClass = staticmethod(_new_element)
    commentClass = staticmethod(_new_comment)
    doctypeClass = staticmethod(_new_doctype)

    def testSerializer(self, node: TreeNode) -> str:  # noqa: N802
        return repr(node)


def _format_error(code: str, datavars: object) -> str:
    message = E.get(code, code)
    try:
        return message % datavars
    except (KeyError, TypeError, ValueError):
        return message


def _child_element(parent: TreeNode, name: str) -> TreeNode | None:
    return next(
        (
            child
            for child in parent.children
            if (element := child.value.as_element()) is not None and element.name == name
        ),
        None,
    )


def _default_tree() -> TreeNode:
    return TreeNode(Node(NodeKind.DOCUMENT))


@dataclass
class Html:
    """A parsed HTML document."""

    errors: list[str] = field(default_factory=list)
    quirks_mode: str = "no quirks"
    tree: TreeNode = field(default_factory=_default_tree)

    @classmethod
    def parse(cls, html: str) -> Html:
        """Parse a full HTML document."""
        parser = html5lib.HTMLParser(tree=_TreeBuilder)
        root = parser.parse(html)
        errors = [_format_error(code, datavars) for _, code, datavars in parser.errors]
        return cls(errors=errors, quirks_mode=parser.compatMode, tree=root)

    def _html(self) -> TreeNode | None:
        return _child_element(self.tree, "html")

    def _head(self) -> TreeNode | None:
        root = self._html()
        return _child_element(root, "head") if root is not None else None

    def title(self) -> str | None:
        """The trimmed text of the first <title> in <head>, if any."""
        head = self._head()
        if head is None:
            return None
        title = _child_element(head, "title")
        if title is None or not title.children:
            return None
        text = title.children[0].value.as_text()
        return text.text.strip() if text is not None else None

    def link_tags(self) -> dict[str, str]:
        """Map of `rel` to `href` for <link> tags in <head> that carry both."""
        head = self._head()
        if head is None:
            return {}
        links: dict[str, str] = {}
        for child in head.children:
            element = child.value.as_element()
            if (
                element is not None
                and element.name == "link"
                and "rel" in element.attrs
                and "href" in element.attrs
            ):
                links[element.attrs["rel"]] = element.attrs["href"]
        return links

    def meta(self) -> dict[str, str]:
        """Map of <meta> `name` (or else `property`) to `content` from <head>."""
        head = self._head()
        if head is None:
            return {}
        found: dict[str, str] = {}
        for child in head.children:
            element = child.value.as_element()
            if element is None or element.name != "meta":
                continue
            if "name" in element.attrs:
                key = element.attrs["name"]
            elif "property" in element.attrs:
                key = element.attrs["property"]
            else:
                continue
            found[key] = element.attrs.get("content", "")
        return found