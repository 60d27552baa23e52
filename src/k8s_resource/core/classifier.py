# src/k8s_resource/core/classifier.py
"""
Decides whether a node belongs to a burstable (serverless/autoscaled) pool.
Such nodes provision capacity on demand, so their allocatable figure is not
a hard ceiling.
"""

from typing import Optional

from ..models.node import NodeKind
from .config import config


class NodeClassifier:
    """Classifies nodes by an exact, case-sensitive name prefix."""

    def __init__(self, burstable_prefix: Optional[str] = None):
        self.burstable_prefix = config.BURSTABLE_NODE_PREFIX if burstable_prefix is None else burstable_prefix

    def classify(self, name: str) -> NodeKind:
        if name.startswith(self.burstable_prefix):
            return NodeKind.BURSTABLE
        return NodeKind.FIXED

    def is_burstable(self, name: str) -> bool:
        return self.classify(name) is NodeKind.BURSTABLE

    def __call__(self, name: str) -> NodeKind:
        return self.classify(name)
