# src/k8s_resource/reporters/base_reporter.py
"""
Defines the abstract base class for all reporters.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models.cluster import ClusterTotals, FitCandidate, JobRequirement, ProvisioningAssessment
from ..models.node import NormalizedNodeRecord


class BaseReporter(ABC):
    """
    Abstract Base Class for all reporters.
    """

    @abstractmethod
    def report_overview(self, totals: ClusterTotals, assessment: ProvisioningAssessment):
        """Presents cluster-wide totals and the provisioning assessment."""
        pass

    @abstractmethod
    def report_nodes(self, records: List[NormalizedNodeRecord]):
        """Presents used/free/total CPU and memory per node."""
        pass

    @abstractmethod
    def report_fit(self, candidates: List[FitCandidate], requirement: JobRequirement):
        """Presents the nodes that can fit a job."""
        pass
