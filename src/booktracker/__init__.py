# ABOUTME: Booktracker - booklists of embedded books kept consistent with a canonical catalog.
# ABOUTME: Subpackages: metadata (values, matching, lookups), db (stores), core (operations), cli.
