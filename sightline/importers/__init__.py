"""URL importers for Chrome bookmarks, Firefox places databases and local folders."""