# sightline

Building blocks for a personal search engine:

- **Scraping** (`sightline.scraper`): parse an HTML page into a node tree.
  From the tree you get the title, the meta tags, the outgoing links, the
  indexable text, a short description and a canonical URL.
- **Searching** (`sightline.search`): a small full-text index scored with
  BM25. Title matches weigh more than content matches. Lens filters limit
  the results to URLs that match regular expressions.
- **Importing** (`sightline.importers`): collect URLs from Chrome bookmark
  files, from Firefox `places.sqlite` databases and from local folders of
  Markdown and text files.

## Installation

```
pip install .
```

To include the test dependencies:

```
pip install .[test]
```

## Scraping a page

```python
from sightline.scraper.text import html_to_text

with open("page.html", encoding="utf-8") as f:
    result = html_to_text(f.read())

print(result.title)          # trimmed <title> text, or None
print(result.description)    # meta description, og:description, first paragraph, or first 256 words
print(result.content)        # indexable text
print(sorted(result.links))  # hrefs of <a> tags, anchor-only links left out
print(result.meta)           # <meta> name/property -> content
print(result.canonical_url)  # absolute canonical link without its fragment, or None
```

Text inside `head`, `header`, `footer`, `nav`, `script`, `style` and a few
other tags is skipped. So are elements whose `role` is `navigation`,
`contentinfo` or `button`.

For lower-level work, `sightline.scraper.html.Html.parse(text)` returns an
`Html` object. It has `title()`, `meta()`, `link_tags()`, the parse
`errors` and the `tree` of `TreeNode`s. Each `TreeNode` holds a
`sightline.scraper.element.Node`. The functions `filter_text_nodes(root)`
and `filter_p_nodes(root)` in `sightline.scraper.text` work on any subtree.

## Indexing and searching

```python
from sightline.search.index import Searcher, SearchFilter

searcher = Searcher.with_index(None)  # in-memory index
doc_id = searcher.add_document(
    "Of Mice and Men",
    "A passage",
    "en.wikipedia.org",
    "https://en.wikipedia.org/mice_and_men",
    "A few miles south of Soledad, the Salinas River drops in close...",
    "",
)
searcher.commit()  # additions and deletions take effect on commit

filters = [SearchFilter.url_regex(r"^https://en\.wikipedia\.org/.*")]
for score, doc in searcher.search_with_lens(filters, "salinas"):
    print(score, doc.url)

print(searcher.get_by_id(doc_id).title)
searcher.delete(doc_id)
searcher.commit()
print(searcher.num_docs())
```

If you pass an existing directory to `Searcher.with_index(path)`, the index
is loaded from `documents.json` in that directory. Every commit writes the
index back to that file. A search returns at most five results, best first.
A document whose URL matches none of the filters is dropped from the
results. An invalid filter pattern raises `ValueError`.

`sightline.search.query.build_query` turns a query string into a tuple of
`BoostedTerm`s. A title match carries a weight of 5 and a content match a
weight of 1. When the query has more than one word, the whole phrase is also
looked for, with a weight of 5, in both the title and the content.

## Importing URLs

```python
import os
from pathlib import Path

from sightline.importers.chrome import find_bookmark_file, parse_and_queue_bookmarks
from sightline.importers.firefox import find_places_db, read_bookmarks
from sightline.importers.local_files import (
    load_processed_paths,
    save_processed_paths,
    walk_and_collect,
)

# Chrome: CHROME_DATA_FOLDER, or HOST_OS with BASE_CONFIG_DIR / BASE_DATA_DIR
bookmarks = find_bookmark_file(os.environ)
if bookmarks is not None and bookmarks.exists():
    # Returns [] when the file's checksum matches the one saved in data_dir.
    print(parse_and_queue_bookmarks(bookmarks.read_text(encoding="utf-8"), "state"))

# Firefox: FIREFOX_DATA_FOLDER, or HOST_OS with HOST_HOME_DIR / BASE_DATA_DIR
places = find_places_db(os.environ)
if places is not None:
    print(read_bookmarks(places))

# Local notes, as file:// URIs
done = load_processed_paths("processed.json")
folder = str(Path.home() / "notes")
if folder not in done:
    print(walk_and_collect(folder, {"md", "txt"}, "home.local"))
    done.add(folder)
save_processed_paths("processed.json", done)
```

## What this package does not do

The package has no crawler, crawl queue or database. It does not watch
folders for changes and does not host plugins. It has no command-line
program, server or desktop window. The importers and the scraper return
URLs, text and metadata, and the `Searcher` stores documents you give it.
Fetching pages and scheduling the work is up to the caller.

## Running the tests

```
pytest
```