"""Command-line interface for Python GraphDot."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import graphviz
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core import GraphDot, OutputFormat, VisualizationConfig
from .core.models import Engine, default_executable
from .visualization import GraphBuilder, GraphRenderer

# Setup rich console
console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Setup logging with rich handler."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _fail(error: Exception) -> None:
    console.print(f"❌ Error: {error}", style="red")
    if logging.getLogger().level == logging.DEBUG:
        console.print_exception()
    sys.exit(1)


def _build(engine: str, output_format: str, verbose: bool) -> GraphDot:
    executable = default_executable() if engine == Engine.DOT.value else engine
    config = VisualizationConfig(
        executable=executable,
        output_format=output_format,
        verbose=verbose,
    )
    return GraphDot(config)


input_argument = click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
format_option = click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice([fmt.value for fmt in OutputFormat]),
    default=OutputFormat.PNG.value,
    help="Output format (default: png)",
)
engine_option = click.option(
    "--engine",
    "-e",
    type=click.Choice([engine.value for engine in Engine]),
    default=Engine.DOT.value,
    help="GraphViz layout engine (default: dot)",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(package_name="python-graphdot")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Python GraphDot - render graphs with GraphViz.

    Reads a graph from a JSON, GraphML or GML file and turns it into a
    DOT script or a rendered image.

    \b
    Examples:
      graphdot script network.json              # Print DOT script
      graphdot export network.json -f svg       # Render network.svg
      graphdot show flows.graphml -e neato      # Render and open a viewer
    """
    setup_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command()
@input_argument
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the script to this file instead of stdout",
)
def script(input_file: Path, output: Path | None) -> None:
    """Print the DOT script for a graph file."""
    try:
        graph = GraphBuilder().load(input_file)
        dot_content = GraphDot().create_script(graph)

        if output:
            output.write_text(dot_content, encoding="utf-8")
            console.print(f"DOT script saved to: {output}", style="green")
        else:
            click.echo(dot_content, nl=False)
    except Exception as e:
        _fail(e)


@cli.command()
@input_argument
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Output file path (default: input name with the format's extension)",
)
@format_option
@engine_option
@click.option("--save-dot", is_flag=True, help="Save DOT source file alongside output")
@click.pass_context
def export(
    ctx: click.Context,
    input_file: Path,
    output: str | None,
    output_format: str,
    engine: str,
    save_dot: bool,
) -> None:
    """Render a graph file to an image.

    Examples:
      graphdot export network.json
      graphdot export network.json -o out/network.svg -f svg --save-dot
    """
    try:
        verbose_mode = ctx.obj.get("verbose", False)
        output_file = output or str(input_file.with_suffix("." + output_format))

        graph = GraphBuilder().load(input_file)
        if verbose_mode:
            console.print(
                f"🎨 Rendering {len(graph.vertices)} vertices and {len(graph.edges)} edges...",
                style="green",
            )

        output_path = _build(engine, output_format, verbose_mode).export(
            graph, output_file, save_dot=save_dot
        )
        console.print(f"{output_path}", style="green")
    except Exception as e:
        _fail(e)


@cli.command()
@input_argument
@format_option
@engine_option
@click.pass_context
def show(ctx: click.Context, input_file: Path, output_format: str, engine: str) -> None:
    """Render a graph file and open it in the default viewer."""
    try:
        graph = GraphBuilder().load(input_file)
        image = _build(engine, output_format, ctx.obj.get("verbose", False)).display(graph)
        console.print(f"{image}", style="green")
    except Exception as e:
        _fail(e)


@cli.command("validate")
def validate_prerequisites() -> None:
    """Check which GraphViz layout engines are installed."""
    engines = GraphRenderer.get_available_engines()

    table = Table(title="GraphViz Engines")
    table.add_column("Engine", style="cyan")
    table.add_column("Status", style="magenta")

    for engine in Engine:
        status_str = "✅ OK" if engine.value in engines else "❌ MISSING"
        table.add_row(engine.value, status_str)

    console.print(table)

    if not engines:
        console.print(
            "\n💡 Install GraphViz: https://graphviz.org/download/",
            style="yellow",
        )
        sys.exit(1)


@cli.command("info")
def show_info() -> None:
    """Show supported output formats and layout engines."""
    formats_table = Table(title="Supported Output Formats")
    formats_table.add_column("Format", style="cyan")
    formats_table.add_column("Description", style="green")

    format_descriptions = {
        "png": "Portable Network Graphics (raster)",
        "svg": "Scalable Vector Graphics (vector)",
        "svgz": "Compressed SVG",
        "pdf": "Portable Document Format",
        "jpg": "JPEG image (raster)",
        "gif": "GIF image (raster)",
        "dot": "DOT with layout information",
        "plain": "Plain text layout description",
    }

    for fmt in OutputFormat:
        formats_table.add_row(fmt.value, format_descriptions.get(fmt.value, ""))

    console.print(formats_table)

    engines_table = Table(title="Layout Engines")
    engines_table.add_column("Engine", style="cyan")
    engines_table.add_column("Description", style="green")

    engine_descriptions = {
        "dot": "Hierarchical layout for directed graphs",
        "neato": "Spring model layout",
        "fdp": "Force-directed layout",
        "sfdp": "Force-directed layout for large graphs",
        "circo": "Circular layout",
        "twopi": "Radial layout",
    }

    for engine in Engine:
        engines_table.add_row(engine.value, engine_descriptions.get(engine.value, ""))

    console.print(engines_table)
    console.print(f"GraphViz library version: {graphviz.__version__}", style="magenta")


def main() -> None:
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
