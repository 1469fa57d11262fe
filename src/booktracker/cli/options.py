# ABOUTME: Shared Click options for Booktracker CLI commands.
# ABOUTME: Provides reusable decorators for --db and --customer.

from pathlib import Path

import click

from booktracker.db.connection import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar="BOOKTRACKER_DB",
    help=f"Path to booktracker database (default: {DEFAULT_DB_PATH})",
)

customer_option = click.option(
    "--customer",
    "customer_id",
    required=True,
    envvar="BOOKTRACKER_CUSTOMER",
    help="Customer id of the reader making the request.",
)
