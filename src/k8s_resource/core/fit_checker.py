# src/k8s_resource/core/fit_checker.py

import logging
from typing import Iterable, List

from ..models.cluster import FitCandidate, JobRequirement
from ..models.node import NormalizedNodeRecord
from .capacity import free_capacity

logger = logging.getLogger(__name__)


def find_fitting_nodes(records: Iterable[NormalizedNodeRecord], requirement: JobRequirement) -> List[FitCandidate]:
    """
    Returns the nodes whose free CPU and free memory both cover the requirement,
    in input order.
    """
    candidates: List[FitCandidate] = []
    for record in records:
        cpu_free, mem_free = free_capacity(record)
        if cpu_free >= requirement.cpu and mem_free >= requirement.memory:
            candidates.append(FitCandidate(name=record.name, cpu_free=cpu_free, mem_free=mem_free))

    logger.debug(
        "%d node(s) can fit %.2f cores / %.2f GB.",
        len(candidates),
        requirement.cpu,
        requirement.memory,
    )
    return candidates
