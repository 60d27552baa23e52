"""Kubernetes cluster resource analyzer."""

__version__ = "1.0.0"
