# ABOUTME: Click subcommands registered on the root booktracker group.
# ABOUTME: One module per command or command group.
