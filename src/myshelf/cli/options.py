# ABOUTME: Shared Click options for MyShelf CLI commands.
# ABOUTME: Provides reusable decorators for --db, --remote and --api-key.

from pathlib import Path

import click

from myshelf.db.connection import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Path to the local library database (default: {DEFAULT_DB_PATH})",
)

remote_option = click.option(
    "--remote",
    "remote_url",
    envvar="MYSHELF_REMOTE_URL",
    default=None,
    help="Base URL of a shared MyShelf server; overrides the local database.",
)

api_key_option = click.option(
    "--api-key",
    "api_key",
    envvar="OPENROUTER_API_KEY",
    default=None,
    help="OpenRouter API key enabling the LLM fallback lookup.",
)
