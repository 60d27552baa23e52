# src/k8s_resource/cli/main.py
"""
This module is the main entry point for the k8s-resource CLI.

It collects one snapshot of node usage and capacity, prints the cluster
overview and node table, and optionally checks which nodes can fit a job.
"""

import asyncio
import logging
import traceback
from typing import Optional, Tuple

import click
import typer
from typer.core import TyperCommand
from typing_extensions import Annotated

from .. import __version__
from ..collectors.metrics_collector import MetricsCollector
from ..core.aggregator import aggregate, assess
from ..core.config import config
from ..core.exceptions import ClusterConnectionError
from ..core.fit_checker import find_fitting_nodes
from ..core.k8s_client import require_k8s_config
from ..core.processor import DataProcessor, Snapshot
from ..exporters.snapshot_exporter import SnapshotExporter
from ..models.cli import REQUIREMENT, JobOptions, ViewOptions
from ..models.cluster import JobRequirement
from ..models.node import CollectionStrategy
from ..reporters.console_reporter import ConsoleReporter

# --- Setup Logger ---
logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

VIEW_KEY = "k8s_resource.view"


class ResourceCommand(TyperCommand):
    """Exits with code 1 on usage errors such as unrecognized flags."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


app = typer.Typer(
    name="k8s-resource",
    help="Analyze and display Kubernetes cluster resource utilization.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool):
    """
    Prints the version of k8s-resource.
    """
    if value:
        typer.echo(f"k8s-resource version {__version__}")
        raise typer.Exit()


def view_callback(ctx: typer.Context, param: typer.CallbackParam, value: bool):
    """Records the section flag; click runs callbacks in command-line order, so the last flag wins."""
    if value:
        ctx.meta[VIEW_KEY] = param.name
    return value


async def collect_snapshot(snapshot_dir: str) -> Tuple[Snapshot, SnapshotExporter]:
    """Loads cluster access, collects one snapshot and writes its files."""
    await require_k8s_config()

    processor = DataProcessor(MetricsCollector())
    try:
        snapshot = await processor.run()
    finally:
        await processor.close()

    exporter = SnapshotExporter(snapshot_dir)
    try:
        await exporter.export(snapshot.collected, snapshot.records)
    except OSError as e:
        logger.warning(f"Could not write snapshot files to '{snapshot_dir}': {e}")
        exporter.cleanup()
    return snapshot, exporter


def prompt_requirement(job_options: JobOptions) -> JobRequirement:
    cpu = job_options.cpu
    if cpu is None:
        cpu = typer.prompt("Enter required CPU cores", type=REQUIREMENT)
    memory = job_options.memory
    if memory is None:
        memory = typer.prompt("Enter required memory (GB)", type=REQUIREMENT)
    return JobRequirement(cpu=cpu, memory=memory)


def run_fit_check(snapshot: Snapshot, reporter: ConsoleReporter, job_options: JobOptions):
    requirement = prompt_requirement(job_options)
    candidates = find_fitting_nodes(snapshot.records, requirement)
    reporter.report_fit(candidates, requirement)


@app.command(cls=ResourceCommand, context_settings={"help_option_names": ["-h", "--help"]})
def main(
    ctx: typer.Context,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "-v",
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Display version information and exit.",
        ),
    ] = None,
    overview: Annotated[
        bool,
        typer.Option("-o", "--overview", callback=view_callback, help="Show only cluster-wide resource overview."),
    ] = False,
    nodes: Annotated[
        bool,
        typer.Option("-n", "--nodes", callback=view_callback, help="Show only node-specific resource details."),
    ] = False,
    job: Annotated[
        bool,
        typer.Option("-j", "--job", help="Start directly with job resource availability check."),
    ] = False,
    cpu: Annotated[
        Optional[float],
        typer.Option("--cpu", click_type=REQUIREMENT, help="Required CPU cores for the job check."),
    ] = None,
    memory: Annotated[
        Optional[float],
        typer.Option("--memory", click_type=REQUIREMENT, help="Required memory (GB) for the job check."),
    ] = None,
    no_cleanup: Annotated[
        bool,
        typer.Option("--no-cleanup", help="Keep temporary JSON files after execution."),
    ] = False,
):
    """
    Analyze and display Kubernetes cluster resource utilization.

    Shows an overview of CPU and memory usage across nodes, flags
    under/over-provisioned resources, and checks whether a job's CPU and
    memory requirements can be satisfied by any node.
    """
    view = ViewOptions.from_selection(ctx.meta.get(VIEW_KEY))
    job_options = JobOptions(job=job, cpu=cpu, memory=memory)
    reporter = ConsoleReporter()

    typer.echo("Gathering cluster metrics...")
    try:
        snapshot, exporter = asyncio.run(collect_snapshot(config.SNAPSHOT_DIR))
    except ClusterConnectionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        logger.error(f"An unexpected error occurred while collecting metrics: {e}")
        logger.debug(traceback.format_exc())
        raise typer.Exit(code=1)

    if snapshot.collected.strategy == CollectionStrategy.PER_NODE:
        typer.echo("Using alternative data gathering method...")

    try:
        if view.show_overview:
            totals = aggregate(snapshot.records)
            reporter.report_overview(totals, assess(totals))

        if view.show_nodes:
            reporter.report_nodes(snapshot.records)

        if job_options.skip_confirmation or typer.confirm(
            "Do you want to check if specific job resources are available?", default=None
        ):
            run_fit_check(snapshot, reporter, job_options)
    finally:
        if no_cleanup:
            typer.echo(f"\nDone. Temporary files kept: {', '.join(exporter.written)}")
        else:
            exporter.cleanup()
            typer.echo("\nDone. Temporary files removed.")


def run():
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
