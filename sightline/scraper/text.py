"""Turn an HTML document into the text, links and metadata used for indexing."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import urlsplit, urlunsplit

from sightline.scraper.html import Html, TreeNode

DEFAULT_DESC_LENGTH = 256

# Elements whose contents rarely hold anything worth indexing.
IGNORED_TAGS = frozenset(
    {
        "head",
        "sup",
        "header",
        "footer",
        "nav",
        "label",
        "textarea",
        "script",
        "noscript",
        "style",
    }
)

# ARIA roles that mark non-content regions.
IGNORED_ROLES = frozenset({"navigation", "contentinfo", "button"})

# Elements that are followed by a space once their text has been collected.
SPACED_TAGS = frozenset({"p", "h1", "h2", "h3", "h4", "h5"})

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_SPECIAL_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss", "file"})


@dataclass
class ScrapeResult:
    """What was pulled out of a page."""

    title: str | None
    description: str
    meta: dict[str, str] = field(default_factory=dict)
    content: str = ""
    links: set[str] = field(default_factory=set)
    canonical_url: str | None = None


def _collect_text(root: TreeNode, chunks: list[str], links: set[str]) -> None:
    for child in root.children:
        node = child.value
        text = node.as_text()
        if text is not None:
            if text.text:
                chunks.append(text.text)
            continue

        element = node.as_element()
        if element is None:
            continue
        if element.name in IGNORED_TAGS:
            continue
        if element.attrs.get("role") in IGNORED_ROLES:
            continue

        if element.name == "a" and "href" in element.attrs:
            href = element.attrs["href"]
            if not href.startswith("#"):
                links.add(href)
        elif element.name == "br" and not (chunks and chunks[-1].endswith(" ")):
            chunks.append(" ")

        if child.has_children():
            _collect_text(child, chunks, links)
            if element.name.lower() in SPACED_TAGS:
                chunks.append(" ")


def filter_text_nodes(root: TreeNode) -> tuple[str, set[str]]:
    """Collect the indexable text below `root` and the links found on the way."""
    chunks: list[str] = []
    links: set[str] = set()
    _collect_text(root, chunks, links)
    return "".join(chunks), links


def filter_p_nodes(root: TreeNode) -> list[str]:
    """The non-empty text of every <p> element below `root`, in document order."""
    paragraphs: list[str] = []
    for child in root.children:
        element = child.value.as_element()
        if element is not None and element.name.lower() == "p":
            content, _ = filter_text_nodes(child)
            if content:
                paragraphs.append(content)
        if child.has_children():
            paragraphs.extend(filter_p_nodes(child))
    return paragraphs


def _canonical_url(href: str | None) -> str | None:
    """An absolute URL without its fragment, or None if `href` is not one."""
    if href is None:
        return None
    try:
        parts = urlsplit(href.strip())
    except ValueError:
        return None
    if not parts.scheme or not _SCHEME.match(parts.scheme):
        return None
    scheme = parts.scheme.lower()
    netloc = parts.netloc
    path = parts.path
    if scheme in _SPECIAL_SCHEMES:
        if scheme != "file" and not netloc:
            return None
        if "@" not in netloc:
            netloc = netloc.lower()
        if not path:
            path = "/"
    return urlunsplit((scheme, netloc, path, parts.query, ""))


def html_to_text(doc: str) -> ScrapeResult:
    """Parse `doc` and pull out its title, description, text, links and meta tags."""
    parsed = Html.parse(doc)
    root = parsed.tree
    meta = parsed.meta()
    link_tags = parsed.link_tags()
    title = parsed.title()

    content, links = filter_text_nodes(root)
    content = content.strip()

    if "description" in meta:
        description = meta["description"]
    elif "og:description" in meta:
        description = meta["og:description"]
    else:
        description = ""

    if not description and content:
        paragraph = next((p for p in filter_p_nodes(root) if p.strip()), None)
        if paragraph:
            description = paragraph.strip()
        else:
            description = " ".join(content.split(" ")[:DEFAULT_DESC_LENGTH])

    return ScrapeResult(
        title=title,
        description=description,
        meta=meta,
        content=content,
        links=links,
        canonical_url=_canonical_url(link_tags.get("canonical")),
    )