"""JSON formatter for Refactor First."""

import json

from ..models import CalculationResult, ReportContext
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the ranking as JSON, highest priority first."""

    def render(self, result: CalculationResult, context: ReportContext) -> None:
        print(self.format(result, context))

    def format(self, result: CalculationResult, context: ReportContext) -> str:
        data = result.to_dict()
        data["project"] = context.project_name
        if context.top_n:
            data["disharmonies"] = data["disharmonies"][: context.top_n]
        return json.dumps(data, indent=2)
