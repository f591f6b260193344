"""JSON formatter for archmap."""

import json

from ..core import AnalysisResult
from ..insights import find_critical_components, summarize_health
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the analysis as the JSON document the graph UI consumes."""

    def __init__(self, include_structure: bool = False, indent: int = 2):
        self.include_structure = include_structure
        self.indent = indent

    def render(self, result: AnalysisResult) -> None:
        print(self.format(result))

    def format(self, result: AnalysisResult) -> str:
        data = result.to_dict(include_structure=self.include_structure)
        data["healthSummary"] = summarize_health(result).to_dict()
        data["criticalComponents"] = [c.to_dict() for c in find_critical_components(result.levels)]
        return json.dumps(data, indent=self.indent)
