# src/k8s_resource/cli/__init__.py
"""
k8s-resource CLI Package

This package exposes the top-level Typer `app` so tests and the console
entrypoint can import `k8s_resource.cli.app`.
"""

# Re-export commonly patched symbols for tests
from ..reporters.console_reporter import ConsoleReporter
from .main import app, run

__all__ = ["app", "run", "ConsoleReporter"]
