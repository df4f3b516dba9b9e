"""JSON formatter for docugit-analyzer."""

import json

from ..analysis.models import AnalysisResult
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the result as the camelCase JSON document."""

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def render(self, result: AnalysisResult) -> None:
        print(self.format(result))

    def format(self, result: AnalysisResult) -> str:
        return json.dumps(result.to_dict(), indent=self.indent)
