"""``docugit-analyzer`` command line: ``analyze`` and ``version``."""

import typer

app = typer.Typer(
    name="docugit-analyzer",
    help="Extract structure, complexity, components and API routes from a JS/TS repository.",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

# Commands register themselves on `app` when their module is imported
from .analyze import analyze as _analyze, version as _version  # noqa: F401, E402
