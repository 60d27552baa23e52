# src/k8s_resource/collectors/base_collector.py
"""
This module defines the abstract base class for data collectors.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseCollector(ABC):
    """
    Abstract Base Class for all metric collectors.
    """

    @abstractmethod
    async def collect(self) -> Any:
        """
        The main method for a collector. It should fetch data from its
        source, parse it, and return Pydantic models.
        """
        pass

    async def close(self):
        """
        Clean up resources (e.g., close API clients).
        """
        pass
