"""repoclone CLI"""

import click

from repoclone import __version__
from repoclone.cli.cache import cache
from repoclone.cli.clone import clone
from repoclone.cli.utils.logging import configure_logging


@click.group()
@click.version_option(__version__, prog_name="repoclone")
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Log every git command and cache lookup.",
)
@click.pass_context
def cli(ctx, debug: bool):
    """
    Obtain and cache local checkouts of git repositories.
    """
    ctx.ensure_object(dict)
    ctx.obj["DEBUG"] = debug
    configure_logging(debug)


cli.add_command(clone)
cli.add_command(cache)

if __name__ == "__main__":
    cli(obj={})
