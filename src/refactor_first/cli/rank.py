"""Main ranking command."""

from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.markup import escape

from ..exceptions import RefactorFirstError
from ..formatters import get_formatter
from ..logging_config import parse_module_levels, set_module_levels, setup_logging
from ..models import ReportContext
from ..ranking import CostBenefitCalculator
from . import app
from ._common import console, resolve_config


@app.command()
def rank_command(
    path: Path = typer.Argument(
        Path("."),
        help="Repository root to analyze (must be the git top level)",
        file_okay=False,
        dir_okay=True,
    ),
    metrics: Optional[str] = typer.Option(
        None,
        "--metrics",
        "-m",
        help="Metrics report (JSON or CSV), relative to PATH unless absolute",
    ),
    details: bool = typer.Option(
        False,
        "--details",
        "-d",
        help="Show every metric, rank and commit date",
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format",
        click_type=click.Choice(["rich", "json", "csv"], case_sensitive=False),
    ),
    top: int = typer.Option(
        0,
        "--top",
        "-t",
        help="Show only the N highest priorities (0 = all)",
        min=0,
    ),
    policy: Optional[str] = typer.Option(
        None,
        "--policy",
        help="Priority policy: quick_win (default) or weighted",
    ),
    wmc_threshold: Optional[int] = typer.Option(
        None, "--wmc-threshold", help="Complexity floor (default 47)", min=0
    ),
    atfd_threshold: Optional[int] = typer.Option(
        None, "--atfd-threshold", help="Foreign data access floor (default 5)", min=0
    ),
    tcc_threshold: Optional[float] = typer.Option(
        None, "--tcc-threshold", help="Cohesion floor (default 0.333)", min=0.0, max=1.0
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_level: Optional[List[str]] = typer.Option(
        None,
        "--log-level",
        help="Per-subsystem log level, e.g. ranking=DEBUG (repeatable)",
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """
    Rank God classes by refactoring priority.

    Joins a metrics report (WMC, ATFD, TCC per class) with git history and
    orders the disharmonies so cheap fixes on frequently changed files
    come first.

    [bold cyan]Examples:[/bold cyan]

      refactor-first

      refactor-first /path/to/repo --metrics build/metrics.csv --details

      refactor-first --format json --top 10
    """
    from .. import __version__

    if version:
        console.print(f"[bold cyan]Refactor First[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        if log_level:
            set_module_levels(parse_module_levels(log_level))

        settings = resolve_config(
            config=config,
            metrics=metrics,
            policy=policy,
            wmc_threshold=wmc_threshold,
            atfd_threshold=atfd_threshold,
            tcc_threshold=tcc_threshold,
            verbose=verbose,
            quiet=quiet,
        )

        calculator = CostBenefitCalculator.from_config(settings)
        result = calculator.calculate(path)

        context = ReportContext(
            project_name=path.resolve().name,
            show_details=details,
            top_n=top,
        )
        get_formatter(fmt.lower()).render(result, context)

    except RefactorFirstError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Ranking interrupted by user")
        console.print("\n[yellow]Ranking interrupted[/yellow]")
        raise typer.Exit(130)
