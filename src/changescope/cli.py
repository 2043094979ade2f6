"""Command-line interface for the changescope tool."""

import json
import logging
from pathlib import Path
from typing import Iterable

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install

from .analyzers import ImpactAnalyzer, ImpactReport
from .core import ChangeScopeError, ImpactConfiguration

console = Console(stderr=True)


def cli():
    """changescope - Impacted package selection for Go repositories

    Prints the package directories that need retesting after a git change,
    one per line, ready to hand to ``go test``.

    USAGE:
        changescope ./...                         # Changes since HEAD, plus untracked files
        changescope --diff "" ./...               # Everything pending in the working tree
        changescope --diff main...HEAD ./...      # Changes on the current branch
        changescope --format json ./...           # Full report with reasons
    """
    analyze()


@click.command()
@click.argument('packages', nargs=-1)
@click.option('--diff', '-d', default='HEAD', show_default=True,
              help="The git commit pattern to diff by. E.g.: 'HEAD', or '<commit>...<commit>'")
@click.option('--include-staged', is_flag=True,
              help='With a single-revision diff, also include staged and modified status entries')
@click.option('--debug', is_flag=True, help='Verbose output.')
@click.option('--format', '-f', type=click.Choice(['text', 'json']), default='text', help='Output format')
@click.option('--output', '-o', type=click.Path(), help='Output file for the impacted paths')
@click.option('--go', 'go_binary', default='go', show_default=True, help='Go executable used to list packages')
def analyze(packages, diff, include_staged, debug, format, output, go_binary):
    """List the package directories impacted by a git diff.

    PACKAGES are forwarded to ``go list`` (e.g. ``./...``).
    """
    _configure_logging(debug)

    config = ImpactConfiguration(
        diff=diff,
        include_staged=include_staged,
        package_patterns=tuple(packages),
        go_binary=go_binary,
    )

    try:
        analyzer = ImpactAnalyzer(config)
        changes = analyzer.changed_files()
        if debug:
            _print_section("git diffs", changes.sorted())

        report = analyzer.analyze(changes)
    except ChangeScopeError as e:
        console.print(f"[red]❌ Error:[/red] {e}", highlight=False)
        raise click.Abort()

    if debug:
        _print_section("paths impacted", _dot_paths(sorted(report.impacted)))
        _print_section("buildable paths impacted", [])

    _output_results(report, format, output)
    return report


def _configure_logging(debug: bool):
    """Route library logging through rich on stderr."""
    if debug:
        install(console=console)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=debug, show_path=debug)],
        force=True,
    )


def _dot_paths(paths: Iterable[str]):
    return [f"./{path}" for path in paths]


def _print_section(title: str, lines):
    console.print(f"--- {title} ---", markup=False, highlight=False)
    for line in lines:
        console.print(line, markup=False, highlight=False)
    if lines:
        console.print()


def _output_results(report: ImpactReport, format, output):
    """Output results in the specified format."""
    if format == 'json':
        output_data = json.dumps(report.to_dict(), indent=2)
    else:
        output_data = '\n'.join(_dot_paths(report.buildable))

    if output:
        Path(output).write_text(output_data + '\n' if output_data else '')
        console.print(f"📄 Results saved to {output}", highlight=False)
    elif output_data:
        click.echo(output_data)
