"""Base formatter interface for archmap output rendering."""

from abc import ABC, abstractmethod

from ..core import AnalysisResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, result: AnalysisResult) -> None:
        """Render the analysis to stdout/stderr as appropriate."""

    @abstractmethod
    def format(self, result: AnalysisResult) -> str:
        """Return formatted string representation of the analysis."""
