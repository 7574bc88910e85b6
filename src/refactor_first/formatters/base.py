"""Base formatter interface for Refactor First output rendering."""

from abc import ABC, abstractmethod
from datetime import datetime

from ..models import CalculationResult, RankedDisharmony, ReportContext

SIMPLE_HEADINGS = [
    "Class",
    "Priority",
    "Change Proneness Rank",
    "Effort Rank",
    "Method Count",
    "Most Recent Commit Date",
    "Commit Count",
]

DETAILED_HEADINGS = [
    "Class",
    "Priority",
    "Change Proneness Rank",
    "Effort Rank",
    "WMC",
    "WMC Rank",
    "ATFD",
    "ATFD Rank",
    "TCC",
    "TCC Rank",
    "Date of First Commit",
    "Date of Most Recent Commit",
    "Commit Count",
    "Full Path",
]


def format_timestamp(moment: datetime) -> str:
    """Render a commit time in the local timezone."""
    return moment.astimezone().strftime("%Y-%m-%d %H:%M")


def table_rows(result: CalculationResult, context: ReportContext) -> tuple[list[str], list[list[str]]]:
    """Headings and string cells, highest priority first."""
    ranked = result.sorted_by_priority()
    if context.top_n:
        ranked = ranked[: context.top_n]
    if context.show_details:
        return DETAILED_HEADINGS, [_detailed_row(d) for d in ranked]
    return SIMPLE_HEADINGS, [_simple_row(d) for d in ranked]


def _simple_row(d: RankedDisharmony) -> list[str]:
    return [
        d.class_name,
        str(d.priority),
        str(d.change_proneness_rank),
        str(d.effort_rank),
        str(d.method_count),
        format_timestamp(d.most_recent_commit_time),
        str(d.commit_count),
    ]


def _detailed_row(d: RankedDisharmony) -> list[str]:
    return [
        d.class_name,
        str(d.priority),
        str(d.change_proneness_rank),
        str(d.effort_rank),
        str(d.wmc),
        str(d.wmc_rank),
        str(d.atfd),
        str(d.atfd_rank),
        f"{d.tcc:.3f}",
        str(d.tcc_rank),
        format_timestamp(d.first_commit_time),
        format_timestamp(d.most_recent_commit_time),
        str(d.commit_count),
        d.path,
    ]


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, result: CalculationResult, context: ReportContext) -> None:
        """Render the result to stdout/stderr as appropriate."""

    @abstractmethod
    def format(self, result: CalculationResult, context: ReportContext) -> str:
        """Return formatted string representation of the result."""
