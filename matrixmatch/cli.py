"""Command-line interface for matrixmatch.

Usage:
    matrixmatch match [model.json] [space.json] [options]
    matrixmatch info transforms.json
    matrixmatch init-config
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .assets.loader import load_transforms
from .core.config import MatcherConfig
from .core.errors import LoadError
from .core.matcher import MatchResult
from .pipeline import MatchPipeline

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich output."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False)],
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """matrixmatch - Find translation offsets between transform sets."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)


def _fmt_vec(v) -> str:
    return f"({v[0]:.3f}, {v[1]:.3f}, {v[2]:.3f})"


def _print_result(result: MatchResult, max_rows: int) -> None:
    stats = result.stats()

    table = Table(title="Summary")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Model transforms", f"{stats['num_model']:,}")
    table.add_row("Matched", f"{stats['num_matched']:,}")
    table.add_row("Unmatched", f"{stats['num_unmatched']:,}")
    table.add_row("Unique offsets", f"{stats['num_unique_offsets']:,}")
    console.print(table)

    if result.matching_offsets:
        offsets = Table(title="Offsets")
        offsets.add_column("#", style="dim")
        offsets.add_column("Offset", style="blue")
        for i, offset in enumerate(result.matching_offsets[:max_rows]):
            offsets.add_row(str(i), _fmt_vec(offset))
        console.print(offsets)
        if len(result.matching_offsets) > max_rows:
            console.print(f"[dim](Showing {max_rows:,} of {len(result.matching_offsets):,} offsets)[/dim]")


@main.command()
@click.argument("model_path", required=False, type=click.Path())
@click.argument("space_path", required=False, type=click.Path())
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Output path for the offsets file",
)
@click.option(
    "--tolerance", "-t",
    type=float,
    help="Per-element tolerance for matching (default 0.01)",
)
@click.option(
    "--dedup-decimals",
    type=click.IntRange(0, 9),
    help="Round offsets to this many decimals when deduplicating",
)
@click.option(
    "--assets-dir",
    type=click.Path(file_okay=False),
    help="Directory relative file names are resolved against",
)
@click.option(
    "--markers",
    type=click.Path(),
    help="Also write a cube marker mesh (e.g. markers.ply, markers.glb)",
)
@click.option(
    "--preview",
    is_flag=True,
    help="Show the result in a matplotlib window",
)
@click.option(
    "--max-rows",
    type=int,
    default=20,
    help="Maximum offsets to list (default 20)",
)
def match(
    model_path: str | None,
    space_path: str | None,
    config: str | None,
    output: str | None,
    tolerance: float | None,
    dedup_decimals: int | None,
    assets_dir: str | None,
    markers: str | None,
    preview: bool,
    max_rows: int,
) -> None:
    """Match model transforms against space transforms and export offsets.

    MODEL_PATH / SPACE_PATH: Transform files. Default to the files named in
    the configuration, resolved against the assets directory.
    """
    cfg = MatcherConfig.from_file(config) if config else MatcherConfig.default()

    # Paths given on the command line are relative to the working directory;
    # only names taken from the configuration resolve against assets_dir.
    if model_path:
        cfg.assets.model_file = str(Path(model_path).absolute())
    if space_path:
        cfg.assets.space_file = str(Path(space_path).absolute())
    if output:
        cfg.assets.output_file = str(Path(output).absolute())
    if assets_dir:
        cfg.assets.assets_dir = Path(assets_dir)
    if tolerance is not None:
        if not math.isfinite(tolerance) or tolerance <= 0:
            raise click.BadParameter("must be a positive finite number", param_hint="--tolerance")
        cfg.match.tolerance = tolerance
    if dedup_decimals is not None:
        cfg.match.dedup_decimals = dedup_decimals
    if markers:
        cfg.markers.export_path = Path(markers).absolute()

    console.print(f"\n[bold]Matrix Matcher[/bold]\n")
    console.print(f"[cyan]Model:[/cyan] {cfg.assets.model_path}")
    console.print(f"[cyan]Space:[/cyan] {cfg.assets.space_path}")
    console.print(f"[cyan]Tolerance:[/cyan] {cfg.match.tolerance}\n")

    report = MatchPipeline(cfg).run()

    if report.status == "unavailable" or report.result is None:
        console.print(f"[bold red]Matching unavailable: {report.error}[/bold red]")
        raise click.Abort()

    _print_result(report.result, max_rows)

    if report.marker_path:
        console.print(f"[cyan]Markers written to {report.marker_path}[/cyan]")

    if report.status == "export_failed":
        console.print(f"[bold red]Export failed: {report.error}[/bold red]")
        raise click.Abort()

    console.print(f"\n[green]Offsets exported to {report.output_path}[/green]")

    if preview:
        from .visualization.preview import show_preview

        if not show_preview(report.result, title=f"{cfg.assets.model_path.name} -> {cfg.assets.space_path.name}"):
            console.print("[yellow]matplotlib not installed - cannot show preview[/yellow]")
            console.print("Install with: pip install matplotlib")


@main.command()
@click.argument("transforms_path", type=click.Path(exists=True))
def info(transforms_path: str) -> None:
    """Show the transforms stored in a file.

    TRANSFORMS_PATH: Path to a model or space transforms file
    """
    path = Path(transforms_path)
    console.print(f"\n[bold]Transforms: {path.name}[/bold]\n")

    try:
        transforms = load_transforms(path)
    except LoadError as e:
        console.print(f"[red]Error loading: {e}[/red]")
        raise click.Abort()

    table = Table()
    table.add_column("#", style="dim")
    table.add_column("Position", style="green")
    table.add_column("Det (3x3)", style="magenta")
    table.add_column("Bottom row", style="yellow")

    for i, t in enumerate(transforms):
        bottom = t.matrix[3]
        table.add_row(
            str(i),
            _fmt_vec(t.position),
            f"{t.determinant:.3f}",
            f"[{bottom[0]:g}, {bottom[1]:g}, {bottom[2]:g}, {bottom[3]:g}]",
        )

    console.print(table)
    console.print(f"\n{len(transforms):,} transforms")


@main.command()
@click.option(
    "--output", "-o",
    type=click.Path(),
    default="matrixmatch_config.json",
    help="Output path for config file",
)
def init_config(output: str) -> None:
    """Generate a default configuration file."""
    try:
        cfg = MatcherConfig.default()
        cfg.to_file(output)
        console.print(f"[green]Created config file: {output}[/green]")
    except OSError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()


if __name__ == "__main__":
    main()
