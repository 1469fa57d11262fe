# ABOUTME: Booklist operations, search, and embedded-copy propagation.
# ABOUTME: Everything here takes its stores and lookups as explicit arguments.
