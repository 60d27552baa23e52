# src/k8s_resource/models/cli.py
"""
Data models and parameter types for the k8s-resource CLI options.
"""

import math
from typing import Optional

import click

from ..core.exceptions import InvalidRequirementError

OVERVIEW = "overview"
NODES = "nodes"


def parse_requirement(value) -> float:
    """Parses a fit-check requirement (cores or GB) into a non-negative float."""
    if isinstance(value, bool):
        raise InvalidRequirementError(f"'{value}' is not a number.")
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidRequirementError(f"'{value}' is not a number.") from None
    if not math.isfinite(number):
        raise InvalidRequirementError(f"'{value}' is not a finite number.")
    if number < 0:
        raise InvalidRequirementError(f"'{value}' must not be negative.")
    return number


class RequirementType(click.ParamType):
    """Click parameter type for non-negative numeric requirements. Invalid input re-prompts."""

    name = "number"

    def convert(self, value, param, ctx):
        if isinstance(value, float):
            return value
        try:
            return parse_requirement(value)
        except InvalidRequirementError as e:
            self.fail(str(e), param, ctx)


REQUIREMENT = RequirementType()


class ViewOptions:
    """Which sections of the report are shown."""

    def __init__(self, show_overview: bool = True, show_nodes: bool = True):
        self.show_overview = show_overview
        self.show_nodes = show_nodes

    @classmethod
    def from_selection(cls, selection: Optional[str]) -> "ViewOptions":
        """Builds options from the last of --overview/--nodes given, or None for both sections."""
        if selection == OVERVIEW:
            return cls(show_overview=True, show_nodes=False)
        if selection == NODES:
            return cls(show_overview=False, show_nodes=True)
        return cls()


class JobOptions:
    """Fit-check options."""

    def __init__(self, job: bool = False, cpu: Optional[float] = None, memory: Optional[float] = None):
        self.job = job
        self.cpu = cpu
        self.memory = memory

    @property
    def is_preset(self) -> bool:
        """True when requirements were passed on the command line, so the check runs without asking."""
        return self.cpu is not None and self.memory is not None

    @property
    def skip_confirmation(self) -> bool:
        return self.job or self.is_preset
