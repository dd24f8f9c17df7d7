"""CLI command handlers for sway-attach.

Commands:
- solve: anchor + flip placement from command-line geometry
- rules: priority rule placement from command-line geometry
- place: place a Sway container next to a rectangle
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import PlacementConfig
from ..errors import PlacementError
from ..models.geometry import (
    Anchor,
    CoordinateSpace,
    FlipHints,
    Rectangle,
    ShadowInsets,
)
from ..models.params import PlacementParams, PlacementResult
from ..models.rules import AttachRule, Border, RulePlacement, RuleSet
from ..services.placement import place_window, place_window_by_rules
from ..services.rule_solver import choose_position
from ..services.solver import solve
from .logging_config import setup_logging

console = Console()
error_console = Console(stderr=True)


def print_error_with_remediation(error: str, remediation: str) -> None:
    """Print error with remediation steps.

    Format: "Error: <issue>" followed by "Remediation: <steps>"
    """
    error_console.print(f"[red]✗ Error:[/red] {escape(error)}")
    error_console.print(f"[blue]  Remediation:[/blue] {remediation}")


# ============================================================================
# Argument parsing helpers
# ============================================================================


def _size(text: str):
    parts = text.lower().split("x")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Invalid size '{text}': expected WIDTHxHEIGHT")
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid size '{text}': expected WIDTHxHEIGHT")
    if width < 0 or height < 0:
        raise argparse.ArgumentTypeError(f"Invalid size '{text}': must not be negative")
    return width, height


def _pair(text: str):
    parts = text.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Invalid pair '{text}': expected DX,DY")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid pair '{text}': expected DX,DY")


def _wrap(parse):
    """Turn a model parser into an argparse type."""

    def convert(text: str):
        try:
            return parse(text)
        except (ValueError, ValidationError) as e:
            raise argparse.ArgumentTypeError(str(e))

    convert.__name__ = getattr(parse, "__name__", "value")
    return convert


def _attach_space(args: argparse.Namespace) -> Optional[CoordinateSpace]:
    relative_to = getattr(args, "relative_to", None)
    if relative_to is not None:
        return CoordinateSpace(con_id=relative_to)
    if args.origin is not None:
        return CoordinateSpace(x=args.origin[0], y=args.origin[1])
    return None


def build_params(args: argparse.Namespace, config: PlacementConfig) -> PlacementParams:
    """PlacementParams from parsed solve/place arguments."""
    params = PlacementParams()
    params.set_attach_rect(args.rect, _attach_space(args))
    params.set_anchors(args.rect_anchor, args.window_anchor)
    params.set_flip_hints(args.flip if args.flip is not None else config.flip_hints)
    params.set_offset(*args.offset)
    return params


# ============================================================================
# Output
# ============================================================================


def _print_result(result: PlacementResult, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result.model_dump()))
        return

    table = Table(show_header=True, header_style="bold cyan", border_style="blue")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("offset", justify="right")
    table.add_column("flipped")
    flipped = ",".join(
        axis for axis, on in (("x", result.flipped_x), ("y", result.flipped_y)) if on
    )
    table.add_row(
        str(result.x),
        str(result.y),
        f"{result.offset_x},{result.offset_y}",
        flipped or "-",
    )
    console.print(table)


def _print_rule_placement(placement: Optional[RulePlacement], as_json: bool) -> None:
    if as_json:
        print(json.dumps(placement.model_dump() if placement else None))
        return

    if placement is None:
        console.print("[yellow]⚠[/yellow] No satisfiable primary/secondary rule pair")
        return

    table = Table(show_header=True, header_style="bold cyan", border_style="blue")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("offset", justify="right")
    table.add_column("rules")
    table.add_row(
        str(placement.x),
        str(placement.y),
        f"{placement.offset_x},{placement.offset_y}",
        placement.describe(),
    )
    console.print(table)


# ============================================================================
# Commands
# ============================================================================


async def cmd_solve(args: argparse.Namespace, config: PlacementConfig) -> int:
    """Solve an anchor + flip placement without touching the compositor."""
    with build_params(args, config) as params:
        result = solve(
            params,
            args.size[0],
            args.size[1],
            shadow=args.shadow if args.shadow is not None else config.shadow,
            bounds=args.bounds,
        )
    _print_result(result, args.json)
    return 0


async def cmd_rules(args: argparse.Namespace, config: PlacementConfig) -> int:
    """Solve a priority rule placement, or apply it to a Sway container."""
    rules = RuleSet(
        primary=args.primary,
        secondary=args.secondary,
        attach_margin=args.attach_margin or Border(),
        window_margin=args.window_margin or Border(),
        window_padding=args.window_padding or Border(),
    )

    if args.con_id is None:
        if args.size is None:
            raise ValueError("--size is required unless --con-id is given")
        if args.relative_to is not None:
            raise ValueError("--relative-to needs --con-id")
        with PlacementParams() as params:
            params.set_attach_rect(args.rect, _attach_space(args))
            params.set_offset(*args.offset)
            placement = choose_position(params, rules, args.size[0], args.size[1], bounds=args.bounds)
    else:
        from ..services.sway_adapter import SwayWindowAdapter

        async with await SwayWindowAdapter.connect(config) as adapter:
            with PlacementParams() as params:
                params.set_attach_rect(args.rect, _attach_space(args))
                params.set_offset(*args.offset)
                placement = await place_window_by_rules(params, rules, args.con_id, adapter)

    _print_rule_placement(placement, args.json)
    return 0 if placement is not None else 2


async def cmd_place(args: argparse.Namespace, config: PlacementConfig) -> int:
    """Place a Sway container next to a rectangle."""
    from ..services.sway_adapter import SwayWindowAdapter

    if args.shadow is not None:
        config = config.model_copy(update={"shadow": args.shadow})

    async with await SwayWindowAdapter.connect(config) as adapter:
        with build_params(args, config) as params:
            result = await place_window(params, args.con_id, adapter)

    _print_result(result, args.json)
    return 0


# ============================================================================
# Entry point
# ============================================================================


def _add_geometry_arguments(
    parser: argparse.ArgumentParser,
    needs_size: bool = True,
    size_required: bool = True,
) -> None:
    parser.add_argument(
        "--rect",
        type=_wrap(Rectangle.parse),
        required=True,
        help="Attachment rectangle X,Y,W,H",
    )
    parser.add_argument(
        "--origin",
        type=_pair,
        default=None,
        help="Origin X,Y of the rectangle's coordinate space",
    )
    parser.add_argument(
        "--offset",
        type=_pair,
        default=(0, 0),
        help="Fixed displacement DX,DY after alignment",
    )
    if needs_size:
        parser.add_argument(
            "--size",
            type=_size,
            required=size_required,
            default=None,
            help="Window size WxH" if size_required else "Window size WxH (required without --con-id)",
        )
        parser.add_argument(
            "--bounds",
            type=_wrap(Rectangle.parse),
            default=None,
            help="Monitor work area X,Y,W,H",
        )
    parser.add_argument("--json", action="store_true", help="Output in JSON format")


def _add_container_arguments(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument(
        "--con-id",
        type=int,
        required=required,
        default=None,
        help="Container to move" if required else "Container to move (queries its size and monitor)",
    )
    parser.add_argument(
        "--relative-to",
        type=int,
        default=None,
        help="Container whose position is the rectangle's origin",
    )


def _add_anchor_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--rect-anchor",
        type=_wrap(Anchor.parse),
        default=Anchor.parse("bottom-left"),
        help="Point on the rectangle (e.g. bottom-left, center, top)",
    )
    parser.add_argument(
        "--window-anchor",
        type=_wrap(Anchor.parse),
        default=Anchor.parse("top-left"),
        help="Point on the window aligned to the rectangle anchor",
    )
    parser.add_argument(
        "--flip",
        type=_wrap(FlipHints.parse),
        default=None,
        help="Axes allowed to flip: none, x, y, x,y, both (default: SWAY_ATTACH_FLIP)",
    )
    parser.add_argument(
        "--shadow",
        type=_wrap(ShadowInsets.parse),
        default=None,
        help="Window shadow insets T,L,R,B (default: SWAY_ATTACH_SHADOW)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sway-attach",
        description="Position windows next to an attachment rectangle on Sway/i3",
    )
    parser.add_argument("--version", action="version", version="sway-attach 1.0.0")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging (INFO level)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level, includes verbose)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # sway-attach solve
    parser_solve = subparsers.add_parser(
        "solve",
        help="Compute an anchor + flip placement",
        description="Compute where a window would go, without moving anything",
    )
    _add_geometry_arguments(parser_solve)
    _add_anchor_arguments(parser_solve)

    # sway-attach rules
    parser_rules = subparsers.add_parser(
        "rules",
        help="Compute or apply a priority rule placement",
        description=(
            "Compute a placement from primary/secondary rules (axis:rect:window); "
            "with --con-id, move that Sway container"
        ),
    )
    _add_container_arguments(parser_rules, required=False)
    _add_geometry_arguments(parser_rules, size_required=False)
    parser_rules.add_argument(
        "--primary",
        type=_wrap(AttachRule.parse),
        nargs="+",
        required=True,
        help="Primary rules in priority order, e.g. y:max:min y:min:max",
    )
    parser_rules.add_argument(
        "--secondary",
        type=_wrap(AttachRule.parse),
        nargs="+",
        required=True,
        help="Secondary rules in priority order, e.g. x:min:min x:max:max",
    )
    for name in ("attach-margin", "window-margin", "window-padding"):
        parser_rules.add_argument(
            f"--{name}",
            type=_wrap(Border.parse),
            default=None,
            help=f"{name.replace('-', ' ').capitalize()} T,L,R,B",
        )

    # sway-attach place
    parser_place = subparsers.add_parser(
        "place",
        help="Move a Sway container next to a rectangle",
        description="Query outputs and the container over IPC, then move it",
    )
    _add_container_arguments(parser_place, required=True)
    _add_geometry_arguments(parser_place, needs_size=False)
    _add_anchor_arguments(parser_place)

    return parser


def cli_main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = PlacementConfig.from_environment()
    except (ValueError, ValidationError) as e:
        print_error_with_remediation(
            f"Invalid environment configuration: {e}",
            "Check SWAY_ATTACH_SHADOW, SWAY_ATTACH_FLIP, SWAY_ATTACH_CONNECT_ATTEMPTS and LOG_LEVEL",
        )
        return 1

    setup_logging(
        verbose=args.verbose,
        debug=args.debug,
        level=config.logging_level,
    )

    if not args.command:
        parser.print_help()
        return 0

    command_handlers = {
        "solve": cmd_solve,
        "rules": cmd_rules,
        "place": cmd_place,
    }

    handler = command_handlers[args.command]
    try:
        return asyncio.run(handler(args, config))
    except ConnectionError as e:
        print_error_with_remediation(str(e), "Make sure Sway/i3 is running and SWAYSOCK/I3SOCK is set")
        return 1
    except PlacementError as e:
        print_error_with_remediation(str(e), "Check the container id and the attachment rectangle")
        return 1
    except ValueError as e:
        print_error_with_remediation(str(e), "Check the geometry arguments")
        return 1


if __name__ == "__main__":
    sys.exit(cli_main())
