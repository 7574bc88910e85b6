"""CSV formatter for Refactor First."""

import csv
import io

from ..models import CalculationResult, ReportContext
from .base import BaseFormatter, table_rows


class CsvFormatter(BaseFormatter):
    """Render the ranking table as CSV."""

    def render(self, result: CalculationResult, context: ReportContext) -> None:
        print(self.format(result, context), end="")

    def format(self, result: CalculationResult, context: ReportContext) -> str:
        headings, rows = table_rows(result, context)
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(headings)
        writer.writerows(rows)
        return output.getvalue()
