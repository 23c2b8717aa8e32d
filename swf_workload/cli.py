"""SWF workload CLI - inspect and convert workload traces."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from swf_workload.config import SynthesizerConfig, WorkloadConfig
from swf_workload.errors import WorkloadError
from swf_workload.export import write_jobs
from swf_workload.predicates import Predicate, all_of, max_processors, min_runtime
from swf_workload.reader import ResourceResolver
from swf_workload.synthesizer import WorkloadSynthesizer

app = typer.Typer(
    name="swf-workload",
    help="Read Standard Workload Format traces into simulated jobs",
    add_completion=False,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _build_predicate(max_procs: int | None, min_run: int | None) -> Predicate | None:
    predicates = []
    if max_procs is not None:
        predicates.append(max_processors(max_procs))
    if min_run is not None:
        predicates.append(min_runtime(min_run))
    return all_of(*predicates) if predicates else None


def _build_synthesizer(
    trace: str,
    mips: int | None,
    config: Path | None,
    predicate: Predicate | None,
) -> WorkloadSynthesizer:
    """Build a synthesizer from a config file, overridden by command-line values."""
    if config is not None:
        workload_config = WorkloadConfig.load(config)
        settings = workload_config.synthesizer.model_dump()
        if mips is not None:
            settings["mips_rate"] = mips
        resolver = ResourceResolver(workload_config.search_paths or None)
        return WorkloadSynthesizer(
            resolver.resolve(trace), SynthesizerConfig(**settings), predicate
        )

    if mips is None:
        console.print("[bold red]Error:[/bold red] --mips is required without --config")
        raise typer.Exit(code=1)
    return WorkloadSynthesizer.from_resource(trace, mips, predicate=predicate)


def _generate(synthesizer: WorkloadSynthesizer):
    try:
        return synthesizer.generate()
    except WorkloadError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


@app.command()
def summary(
    trace: str = typer.Argument(..., help="Trace file path or name"),
    mips: int | None = typer.Option(None, "--mips", "-m", help="MIPS of the target PE"),
    max_procs: int | None = typer.Option(None, "--max-processors", help="Keep jobs up to N PEs"),
    min_run: int | None = typer.Option(None, "--min-runtime", help="Keep jobs of at least S seconds"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to configuration file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Generate jobs from a trace and print summary statistics."""
    _setup_logging(verbose)

    try:
        synthesizer = _build_synthesizer(trace, mips, config, _build_predicate(max_procs, min_run))
    except (WorkloadError, FileNotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    jobs = _generate(synthesizer)
    stats = synthesizer.stats

    table = Table(title=f"Workload: {synthesizer.source.name}", show_header=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("MIPS Rate", str(synthesizer.mips_rate))
    table.add_row("Lines Read", str(stats.lines_read))
    table.add_row("Comment Lines", str(stats.comment_lines))
    table.add_row("Malformed Records", str(stats.malformed_records))
    table.add_row("Rejected Records", str(stats.rejected_records))
    table.add_row("Jobs", str(len(jobs)))

    if jobs:
        table.add_row("Max Processors", str(max(j.processor_count for j in jobs)))
        table.add_row("Total Length (MI)", str(sum(j.total_length for j in jobs)))
        table.add_row("Processor Seconds", str(sum(j.processor_seconds for j in jobs)))
        table.add_row(
            "Submit Span (s)",
            f"{min(j.submit_delay_seconds for j in jobs)} - "
            f"{max(j.submit_delay_seconds for j in jobs)}",
        )

    console.print(table)


@app.command()
def convert(
    trace: str = typer.Argument(..., help="Trace file path or name"),
    output: Path = typer.Argument(..., help="Output file (.csv or .parquet)"),
    mips: int | None = typer.Option(None, "--mips", "-m", help="MIPS of the target PE"),
    max_procs: int | None = typer.Option(None, "--max-processors", help="Keep jobs up to N PEs"),
    min_run: int | None = typer.Option(None, "--min-runtime", help="Keep jobs of at least S seconds"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to configuration file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Generate jobs from a trace and write them to a tabular file."""
    _setup_logging(verbose)

    try:
        synthesizer = _build_synthesizer(trace, mips, config, _build_predicate(max_procs, min_run))
    except (WorkloadError, FileNotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    jobs = _generate(synthesizer)

    try:
        written = write_jobs(jobs, output)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✓[/green] Wrote {len(jobs)} jobs to {written}")


if __name__ == "__main__":
    app()
