# src/k8s_resource/reporters/console_reporter.py
"""
A reporter that displays cluster and node capacity in formatted tables in the console.
"""

import logging
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..core.capacity import node_capacity_view
from ..core.config import config
from ..models.cluster import (
    ClusterTotals,
    FitCandidate,
    JobRequirement,
    ProvisioningAssessment,
    ProvisioningState,
)
from ..models.node import NormalizedNodeRecord
from .base_reporter import BaseReporter

logger = logging.getLogger(__name__)


def _cores(value: float) -> str:
    return f"{value:.2f} cores"


def _gb(value: float) -> str:
    return f"{value:.2f} GB"


class ConsoleReporter(BaseReporter):
    """
    Renders cluster capacity data to the console using the 'rich' library.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def report_overview(self, totals: ClusterTotals, assessment: ProvisioningAssessment):
        """
        Displays cluster-wide totals followed by the provisioning assessment.
        """
        table = Table(
            title="Cluster-wide Resource Overview",
            header_style="bold magenta",
        )
        table.add_column("Resource", style="cyan")
        table.add_column("Total", justify="right")
        table.add_column("Used", justify="right")
        table.add_column("Available", style="green", justify="right")
        table.add_column("Utilization %", style="yellow", justify="right")

        table.add_row(
            "CPU",
            _cores(totals.total_cpu),
            _cores(totals.used_cpu),
            _cores(totals.available_cpu),
            f"{totals.cpu_utilization:.2f}%",
        )
        table.add_row(
            "Memory",
            _gb(totals.total_memory),
            _gb(totals.used_memory),
            _gb(totals.available_memory),
            f"{totals.memory_utilization:.2f}%",
        )
        self.console.print(table)

        self.console.print("\nCluster Provisioning Assessment:", style="bold")
        self.console.print(f"CPU: {self._describe(assessment.cpu)}")
        self.console.print(f"Memory: {self._describe(assessment.memory)}")

    def _describe(self, state: ProvisioningState) -> str:
        under = f"{config.UNDER_UTILIZED_THRESHOLD:g}"
        over = f"{config.OVER_PROVISIONED_THRESHOLD:g}"
        if state == ProvisioningState.UNDER_UTILIZED:
            return f"[bold yellow]Potentially UNDER-UTILIZED[/] (< {under}% usage)"
        if state == ProvisioningState.OVER_PROVISIONED:
            return f"[bold red]Potentially OVER-PROVISIONED[/] (> {over}% usage)"
        return f"[bold green]OPTIMALLY provisioned[/] ({under}-{over}% usage)"

    def report_nodes(self, records: List[NormalizedNodeRecord]):
        """
        Displays used/free/total CPU and memory for every node, in snapshot order.
        """
        if not records:
            self.console.print("No nodes to report.", style="yellow")
            return

        table = Table(
            title="Node Resource Availability",
            header_style="bold magenta",
        )
        table.add_column("Node Name", style="cyan", no_wrap=True)
        table.add_column("CPU (Used)", justify="right")
        table.add_column("CPU (Free)", style="green", justify="right")
        table.add_column("CPU (Total)", justify="right")
        table.add_column("Mem (Used)", justify="right")
        table.add_column("Mem (Free)", style="green", justify="right")
        table.add_column("Mem (Total)", justify="right")

        for record in records:
            view = node_capacity_view(record)
            table.add_row(
                view.name,
                f"{view.cpu_used:.2f}",
                f"{view.cpu_free:.2f}",
                f"{view.cpu_total:.2f}",
                f"{view.mem_used:.2f}",
                f"{view.mem_free:.2f}",
                f"{view.mem_total:.2f}",
            )

        self.console.print(table)

    def report_fit(self, candidates: List[FitCandidate], requirement: JobRequirement):
        """
        Displays the nodes with enough free capacity for the requirement.
        """
        self.console.print(
            f"\nChecking capacity for job requiring {requirement.cpu:g} CPU cores "
            f"and {requirement.memory:g} GB memory..."
        )
        if not candidates:
            self.console.print("No node has sufficient resources for this job.", style="yellow")
            return

        table = Table(
            title="Nodes with sufficient resources",
            header_style="bold magenta",
        )
        table.add_column("Node Name", style="cyan", no_wrap=True)
        table.add_column("CPU Available", style="green", justify="right")
        table.add_column("Mem Available (GB)", style="green", justify="right")

        for candidate in candidates:
            table.add_row(*candidate.as_row())

        self.console.print(table)
