"""HTML parsing into a node tree and text extraction for indexing."""