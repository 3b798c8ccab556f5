from __future__ import annotations

import logging
import shutil
import sys
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer
from result import Err
from rich.console import Console
from rich.markup import escape

from rexp.config.defaults import THEMES, default_config
from rexp.config.loader import load_config, sample_config_json
from rexp.core.display import build_modules
from rexp.core.explorer import Explorer
from rexp.ui.app import RexpApp

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _configure_logging(log_file: str | None) -> None:
    if log_file is None:
        return
    logging.basicConfig(filename=log_file, level=logging.DEBUG, format=_LOG_FORMAT)


def _viewport_rows(reserved_rows: int) -> int:
    # One row for the path header.
    return max(1, shutil.get_terminal_size().lines - reserved_rows - 1)


def run(
    path: Annotated[str, typer.Argument(help="Directory to start in.")] = ".",
    sample_config: Annotated[bool, typer.Option("--sample-config", help="Print sample config JSON.")] = False,
    no_icons: Annotated[bool, typer.Option("--no-icons", help="Hide the nerd-font icon column.")] = False,
    theme: Annotated[
        str | None,
        typer.Option("--theme", help=f"Color theme: {', '.join(THEMES)}."),
    ] = None,
    log_file: Annotated[str | None, typer.Option("--log-file", help="Write debug logs to this file.")] = None,
    print_cwd: Annotated[
        bool,
        typer.Option("--print-cwd/--no-print-cwd", help="Print the final directory on exit."),
    ] = True,
    cwd_file: Annotated[str | None, typer.Option("--cwd-file", help="Write the final directory to this file.")] = None,
) -> None:
    if sys.platform == "win32":
        err_console.print("[red]Windows support is not implemented yet.[/]")
        raise typer.Exit(1)

    if sample_config:
        console.print(sample_config_json(), highlight=False, markup=False, soft_wrap=True)
        raise typer.Exit(0)

    _configure_logging(log_file)

    config_result = load_config()
    if isinstance(config_result, Err):
        err_console.print(f"[yellow]{escape(config_result.unwrap_err())} Using defaults.[/]")
        config = default_config()
    else:
        config = config_result.unwrap()

    if theme is not None:
        chosen = THEMES.get(theme.lower())
        if chosen is None:
            err_console.print(f"[red]Unknown theme: {escape(theme)}. Use: {', '.join(THEMES)}.[/]")
            raise typer.Exit(1)
        config = replace(config, theme=chosen)

    names = config.module_names()
    if no_icons:
        config = replace(config, nerd_fonts=False)
        names = [name for name in names if name != "icon"]
    modules = build_modules(names, config.date_format)

    explorer_result = Explorer.open(path, modules, viewport_rows=_viewport_rows(config.reserved_rows))
    if isinstance(explorer_result, Err):
        error = explorer_result.unwrap_err()
        err_console.print(f"[red]Cannot open {escape(error.path)}: {escape(error.message)}[/]")
        raise typer.Exit(1)
    explorer = explorer_result.unwrap()
    logger.info("Starting in %s", explorer.cwd)

    final_cwd = RexpApp(explorer, config).run() or explorer.cwd
    logger.info("Exiting in %s", final_cwd)

    if cwd_file is not None:
        Path(cwd_file).write_text(final_cwd + "\n", encoding="utf-8")
    if print_cwd:
        print(final_cwd)


def cli() -> None:
    typer.run(run)


if __name__ == "__main__":
    cli()
