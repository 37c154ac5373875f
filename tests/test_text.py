from sightline.scraper.html import Html
from sightline.scraper.text import (
    DEFAULT_DESC_LENGTH,
    filter_p_nodes,
    filter_text_nodes,
    html_to_text,
)

BASIC = (
    "<html><head><title> Hello </title>"
    "<meta name='description' content='Desc'></head>"
    "<body><p>First para</p><a href='https://example.com/a'>link</a>"
    "<a href='#top'>x</a></body></html>"
)


def test_basic_document():
    doc = html_to_text(BASIC)
    assert doc.title == "Hello"
    assert doc.meta == {"description": "Desc"}
    assert doc.description == "Desc"
    assert doc.content == "First para linkx"
    assert doc.links == {"https://example.com/a"}
    assert doc.canonical_url is None


def test_description_from_og_meta():
    html = (
        "<html><head><meta property='og:description' content='From og'></head>"
        "<body><p>Body text</p></body></html>"
    )
    assert html_to_text(html).description == "From og"


def test_description_from_first_non_blank_paragraph():
    html = (
        "<html><head><title>T</title></head><body><div>intro</div>"
        "<p>  </p><p>Second <b>bold</b> text</p></body></html>"
    )
    doc = html_to_text(html)
    assert doc.description == "Second bold text"


def test_description_falls_back_to_leading_words():
    words = [f"w{i}" for i in range(300)]
    html = f"<html><body><div>{' '.join(words)}</div></body></html>"
    doc = html_to_text(html)
    assert doc.description.split(" ") == words[:DEFAULT_DESC_LENGTH]


def test_no_content_no_description():
    doc = html_to_text("<html><head><title>Empty</title></head><body></body></html>")
    assert doc.content == ""
    assert doc.description == ""
    assert doc.title == "Empty"


def test_br_inserts_space():
    doc = html_to_text("<html><body><div>one<br>two</div></body></html>")
    assert doc.content == "one two"


def test_headings_are_spaced():
    doc = html_to_text("<html><body><h1>Title</h1><div>text</div></body></html>")
    assert doc.content == "Title text"


def test_navigation_role_and_scripts_are_skipped():
    html = (
        "<html><body><div role='navigation'>menu</div>"
        "<script>var x;</script><div>main</div></body></html>"
    )
    assert html_to_text(html).content == "main"


def test_ignored_elements_do_not_contribute_links():
    html = (
        "<html><body><nav><a href='https://example.com/nav'>n</a></nav>"
        "<div><a href='https://example.com/body'>b</a></div></body></html>"
    )
    assert html_to_text(html).links == {"https://example.com/body"}


def test_canonical_url_drops_fragment():
    html = (
        "<html><head><link rel='canonical' href='https://example.com/page#frag'>"
        "</head><body>x</body></html>"
    )
    assert html_to_text(html).canonical_url == "https://example.com/page"


def test_relative_canonical_url_is_ignored():
    html = (
        "<html><head><link rel='canonical' href='/page'></head>"
        "<body>x</body></html>"
    )
    assert html_to_text(html).canonical_url is None


def test_filter_p_nodes_finds_nested_paragraphs():
    tree = Html.parse("<html><body><p>a</p><div><p>b</p></div></body></html>").tree
    assert filter_p_nodes(tree) == ["a", "b"]


def test_filter_text_nodes_returns_text_and_links():
    tree = Html.parse(
        "<html><body><p>see <a href='https://example.com/x'>here</a></p></body></html>"
    ).tree
    text, links = filter_text_nodes(tree)
    assert text.strip() == "see here"
    assert links == {"https://example.com/x"}