from .metrics_collector import MetricsCollector

__all__ = [
    "MetricsCollector",
]
