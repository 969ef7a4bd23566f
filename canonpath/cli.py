from typing import List, Optional

from dotenv import find_dotenv, load_dotenv
from loguru import logger
from rich.console import Console
import typer

from .enums import ExistenceMode
from .exceptions import InvalidConfigurationException, ResolutionError
from .resolver import Resolver

# initialize CLI
cli = typer.Typer(add_completion=False)

err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> Optional[int]:
    if not verbose:
        return None

    handler_id = logger.add(
        lambda msg: typer.echo(msg, err=True, nl=False),
        level="TRACE",
        colorize=False,
        filter="canonpath",
    )
    logger.enable("canonpath")
    return handler_id


@cli.command()
def main(
    paths: List[str] = typer.Argument(..., help="Paths to canonicalize."),
    exact: bool = typer.Option(
        False, "--exact", "-e", help="Require the final component of each path to exist."
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Don't print error messages."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every resolution step."),
    loop_budget: Optional[int] = typer.Option(
        None, min=1, help="Maximum number of path components processed per path."
    ),
):
    """Print the canonical absolute form of each PATH, with every symlink followed and every
    `.` and `..` component removed.
    """
    # get environment variables
    load_dotenv(find_dotenv(usecwd=True))

    try:
        resolver = Resolver(loop_budget=loop_budget)
        mode = ExistenceMode.exact if exact else ExistenceMode.coerce(None)
    except InvalidConfigurationException as e:
        err_console.print(f"canonpath: {e}", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(code=2)

    handler_id = _configure_logging(verbose)
    failed = False
    try:
        for path in paths:
            try:
                typer.echo(resolver.resolve(path, mode))
            except ResolutionError as e:
                failed = True
                if not quiet:
                    err_console.print(
                        f"canonpath: {path}: {e.strerror}",
                        markup=False,
                        highlight=False,
                        soft_wrap=True,
                    )
    finally:
        logger.disable("canonpath")
        if handler_id is not None:
            logger.remove(handler_id)

    if failed:
        raise typer.Exit(code=1)


def run():
    """Console script entry point. Drops loguru's default stderr handler so only `--verbose`
    output reaches the terminal."""
    logger.remove()
    cli(prog_name="canonpath")
