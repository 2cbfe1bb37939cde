"""Command-line entry point."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from fairyboard.config import Settings, load_settings
from fairyboard.core import (
    Board,
    Color,
    FairyboardError,
    MoveGenerator,
    Rules,
    TerminalState,
    parse_board,
    perft,
)
from fairyboard.game import Ruleset, resolve_ruleset, standard_hooks
from fairyboard.log import setup_logging

console = Console()

_F = TypeVar("_F", bound=Callable[..., Any])
_COLOR_STYLES = {Color.WHITE: "bold", Color.BLACK: "cyan", Color.YELLOW: "yellow"}


def _reports_errors(func: _F) -> _F:
    """Turn library errors into a clean click failure (exit code 1)."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except FairyboardError as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper  # type: ignore[return-value]


def _load(settings: Settings, ref: str | None, board_text: str | None) -> tuple[Ruleset, Board]:
    ruleset = resolve_ruleset(ref or settings.ruleset)
    if board_text is None:
        return ruleset, ruleset.new_board()
    return ruleset, parse_board(board_text, ruleset.catalogue)


def render_board(board: Board) -> Table:
    """Board as a rich table, row 0 at the top."""
    table = Table(show_header=True, header_style="dim", box=None, padding=(0, 1))
    table.add_column("", style="dim", justify="right")
    for x in range(board.width):
        table.add_column(str(x), justify="center")
    for y, row in enumerate(board.rows):
        cells = [
            Text("·", style="dim") if p is None else Text(str(p), style=_COLOR_STYLES[p.color])
            for p in row
        ]
        table.add_row(str(y), *cells)
    return table


# -- Commands -------------------------------------------------------------------

ruleset_argument = click.argument("ruleset", required=False)
board_option = click.option(
    "--board", "board_text", help="Board notation to use instead of the start position."
)
color_option = click.option(
    "--color",
    type=click.Choice([str(c) for c in Color]),
    default=str(Color.WHITE),
    show_default=True,
    help="Side to move.",
)


@click.group()
@click.option("--log-level", default=None, help="Logging level (overrides settings).")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Settings YAML file.",
)
@click.pass_context
@_reports_errors
def cli(ctx: click.Context, log_level: str | None, config_path: str | None) -> None:
    """Fairy chess rules engine: inspect rulesets, list moves, run perft."""
    settings = load_settings(config_path)
    try:
        setup_logging(log_level or settings.log_level, settings.log_file)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--log-level") from exc
    ctx.obj = settings


@cli.command()
@ruleset_argument
@board_option
@click.pass_obj
@_reports_errors
def show(settings: Settings, ruleset: str | None, board_text: str | None) -> None:
    """Render the board of RULESET and list its pieces."""
    rules, board = _load(settings, ruleset, board_text)
    console.print(Text(rules.name, style="bold"))
    console.print(render_board(board))

    pieces = Table(title="Pieces")
    for column in ("Symbol", "Name", "Value", "Royal"):
        pieces.add_column(column)
    for symbol, piece in sorted(rules.catalogue.items()):
        pieces.add_row(symbol, piece.name, f"{piece.value:g}", "yes" if piece.royal else "")
    console.print(pieces)


@cli.command()
@ruleset_argument
@board_option
@color_option
@click.option("--pseudo", is_flag=True, help="List pseudo-legal moves (no self-check filter).")
@click.pass_obj
@_reports_errors
def moves(
    settings: Settings,
    ruleset: str | None,
    board_text: str | None,
    color: str,
    pseudo: bool,
) -> None:
    """List the moves of a side."""
    rules, board = _load(settings, ruleset, board_text)
    side = Color.parse(color)
    hooks = standard_hooks()
    if pseudo or settings.show_pseudo_legal:
        found = MoveGenerator(rules.catalogue, board).generate_moves(side, hooks)
        kind = "pseudo-legal"
    else:
        found = Rules.legal_moves(side, rules.catalogue, board, hooks)
        kind = "legal"
    for move in found:
        console.print(str(move))
    console.print(Text(f"{len(found)} {kind} moves for {side}", style="bold"))


@cli.command("perft")
@ruleset_argument
@board_option
@color_option
@click.option("--depth", type=click.IntRange(min=0), default=None, help="Plies to search.")
@click.pass_obj
@_reports_errors
def perft_command(
    settings: Settings,
    ruleset: str | None,
    board_text: str | None,
    color: str,
    depth: int | None,
) -> None:
    """Count leaf nodes of the legal move tree."""
    rules, board = _load(settings, ruleset, board_text)
    plies = settings.perft_depth if depth is None else depth
    side = Color.parse(color)
    if side not in rules.colors:
        raise click.BadParameter(f"{side} does not play in {rules.name}", param_hint="--color")
    nodes = perft(side, rules.catalogue, board, plies, rules.colors)
    console.print(f"perft({plies}) = {nodes}")


@cli.command()
@ruleset_argument
@board_option
@color_option
@click.pass_obj
@_reports_errors
def status(settings: Settings, ruleset: str | None, board_text: str | None, color: str) -> None:
    """Report whether a side is in check, checkmated or stalemated."""
    rules, board = _load(settings, ruleset, board_text)
    side = Color.parse(color)
    state = Rules.terminal_state(side, rules.catalogue, board, standard_hooks())
    if state == TerminalState.CHECKMATED:
        console.print(Text(f"{side} is checkmated", style="bold red"))
    elif state == TerminalState.STALEMATED:
        console.print(Text(f"{side} is stalemated", style="bold yellow"))
    elif Rules.is_in_check(side, rules.catalogue, board):
        console.print(Text(f"{side} is in check", style="yellow"))
    else:
        console.print(f"{side} to move")


def main() -> None:
    """Launch the ``fairyboard`` command."""
    cli()


if __name__ == "__main__":
    main()
