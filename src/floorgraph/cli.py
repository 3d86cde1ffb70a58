"""Command Line Interface for floorgraph.

This module provides a simple CLI for detecting rooms, applying edit
operations and validating floor plan snapshots.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core.model import Point
from .core.topology import build_room_graph
from .engine.api import apply_operations
from .engine.api import rooms as detect_plan_rooms
from .engine.rooms import find_room_at_point, room_type_label, suggest_room_type
from .engine.validators import validate_plan
from .geom.polygon import room_perimeter
from .io.parser import load_plan, save_plan

app = typer.Typer(
    name="floorgraph",
    help="A CLI tool for corner/wall floor plan graphs and room detection",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _parse_point(value: str) -> Point:
    try:
        x, y = (float(part) for part in value.split(","))
    except ValueError:
        raise typer.BadParameter(f"Expected 'x,y', got '{value}'")
    return Point(x, y)


@app.command()
def rooms(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
    at: Optional[str] = typer.Option(None, "--at", help="Only show the room containing point 'x,y'"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """Detect and list the rooms enclosed by a plan's walls."""
    _setup_logging(verbose)
    try:
        plan_obj = load_plan(str(plan))
        console.print(
            f"[green]✓[/green] Loaded plan from {plan} "
            f"({len(plan_obj.corners)} corners, {len(plan_obj.walls)} walls)"
        )

        detected = detect_plan_rooms(plan_obj)
        if at is not None:
            room = find_room_at_point(_parse_point(at), detected)
            if room is None:
                console.print(f"[yellow]No room contains point {at}[/yellow]")
                raise typer.Exit(1)
            detected = [room]

        graph = build_room_graph(detected, plan_obj)

        table = Table(title=f"{len(detected)} room(s)")
        table.add_column("Name", style="cyan")
        table.add_column("Suggested type")
        table.add_column("Area (sq ft)", justify="right")
        table.add_column("Perimeter (ft)", justify="right")
        table.add_column("Center", justify="center")
        table.add_column("Corners", justify="right")
        table.add_column("Neighbours", justify="right")

        for room in detected:
            table.add_row(
                room.name,
                room_type_label(suggest_room_type(room)),
                f"{room.area:.2f}",
                f"{room_perimeter(room):.2f}",
                f"({room.center.x:.2f}, {room.center.y:.2f})",
                str(len(room.corners)),
                str(graph.degree(room.id)),
            )
            if verbose:
                console.print(f"  {room.name}: {room.id}")

        console.print(table)

    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON - {e}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def apply(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
    operation: Path = typer.Option(..., "--op", help="Path to operation JSON file (object or list)"),
    output: Path = typer.Option(..., "--out", help="Path to output plan JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """Apply one or more edit operations to a plan and save the result."""
    _setup_logging(verbose)
    try:
        plan_obj = load_plan(str(plan))
        console.print(f"[green]✓[/green] Loaded plan from {plan}")

        with open(operation, encoding="utf-8") as f:
            operation_data = json.load(f)

        operations = operation_data if isinstance(operation_data, list) else [operation_data]
        console.print(f"[green]✓[/green] Loaded {len(operations)} operation(s) from {operation}")

        final_plan, results = apply_operations(plan_obj, operations)

        successful = sum(1 for r in results if r["success"])
        changed = sum(1 for r in results if r["changed"])
        console.print(f"[green]✓[/green] Applied {successful}/{len(operations)} operations ({changed} changed the plan)")

        if verbose:
            for i, result in enumerate(results):
                status = "✓" if result["success"] else "✗"
                console.print(f"  Operation {i+1} ({result['operation'].get('op')}): {status}")
                if "error" in result:
                    console.print(f"    Error: {result['error']}")

        save_plan(final_plan, str(output))
        console.print(f"[green]✓[/green] Plan saved to {output}")

        detected = detect_plan_rooms(final_plan)
        console.print(f"[blue]ℹ[/blue] {len(detected)} room(s) after edit")

        if successful < len(operations):
            raise typer.Exit(1)

    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON - {e}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def validate(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
):
    """Check a plan for dangling references, duplicate walls and misplaced openings."""
    try:
        plan_obj = load_plan(str(plan))
    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except (json.JSONDecodeError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    problems = validate_plan(plan_obj)
    if not problems:
        console.print("[bold green]✓ Plan is valid[/bold green]")
        return

    for problem in problems:
        console.print(f"[red]✗[/red] {problem}")
    console.print(f"\n[bold red]{len(problems)} problem(s) found[/bold red]")
    raise typer.Exit(1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
