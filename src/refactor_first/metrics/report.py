"""Read precomputed class metrics from a JSON or CSV report.

The report is produced by whatever static analyzer the project already runs;
this module only parses and validates it. Accepted layouts:

JSON, either a list of records or ``{"classes": [...]}``::

    [{"class_name": "org.acme.Order", "path": "src/main/java/org/acme/Order.java",
      "wmc": 61, "atfd": 9, "tcc": 0.12, "method_count": 34}]

CSV with a header row using the same field names.

camelCase keys (``className``, ``methodCount``) are accepted as well.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from ..exceptions import InvalidPathError, MetricsExtractionError
from ..file_ops import normalize_path
from ..logging_config import get_logger
from ..models import ClassMetrics

logger = get_logger(__name__)

_ALIASES = {
    "classname": "class_name",
    "class": "class_name",
    "name": "class_name",
    "file": "path",
    "filepath": "path",
    "file_path": "path",
    "methodcount": "method_count",
    "methods": "method_count",
}

_REQUIRED = ("class_name", "path", "wmc", "atfd", "tcc")


class ReportMetricsProvider:
    """Load ClassMetrics from a metrics report file.

    Args:
        report_path: Report location. Relative paths resolve against the
            source root passed to ``extract``.
    """

    def __init__(self, report_path: str | Path):
        self.report_path = Path(report_path)

    def extract(self, source_root: Path) -> Sequence[ClassMetrics]:
        path = self._locate(source_root)
        suffix = path.suffix.lower()

        try:
            with open(path, encoding="utf-8-sig", newline="") as f:
                if suffix == ".json":
                    records = _records_from_json(json.load(f), path)
                elif suffix == ".csv":
                    records = list(csv.DictReader(f))
                else:
                    raise MetricsExtractionError(
                        str(path), f"unsupported report format '{suffix or '(none)'}'"
                    )
        except OSError as e:
            raise MetricsExtractionError(str(path), str(e))
        except json.JSONDecodeError as e:
            raise MetricsExtractionError(str(path), f"invalid JSON: {e}")

        metrics = [
            self._to_metrics(record, index, source_root, path)
            for index, record in enumerate(records, start=1)
        ]
        logger.info(f"Loaded metrics for {len(metrics)} classes from {path}")
        return metrics

    def _locate(self, source_root: Path) -> Path:
        path = self.report_path
        if not path.is_absolute():
            path = source_root / path
        if not path.is_file():
            raise MetricsExtractionError(str(path), "metrics report not found")
        return path

    def _to_metrics(
        self, record: Mapping[str, Any], index: int, source_root: Path, report: Path
    ) -> ClassMetrics:
        fields = _canonical_keys(record)
        missing = [name for name in _REQUIRED if _blank(fields.get(name))]
        if missing:
            raise MetricsExtractionError(
                str(report), f"record {index} is missing {', '.join(missing)}"
            )

        try:
            return ClassMetrics(
                class_name=str(fields["class_name"]).strip(),
                path=normalize_path(str(fields["path"]), source_root),
                wmc=_as_int(fields["wmc"]),
                atfd=_as_int(fields["atfd"]),
                tcc=float(fields["tcc"]),
                method_count=_as_int(fields.get("method_count") or 0),
            )
        except (InvalidPathError, TypeError, ValueError) as e:
            raise MetricsExtractionError(str(report), f"record {index}: {e}")


def _records_from_json(data: Any, path: Path) -> list[Mapping[str, Any]]:
    if isinstance(data, dict):
        data = data.get("classes")
    if not isinstance(data, list):
        raise MetricsExtractionError(str(path), "expected a list of class records")
    for item in data:
        if not isinstance(item, dict):
            raise MetricsExtractionError(str(path), "every class record must be an object")
    return data


def _canonical_keys(record: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in record.items():
        if key is None:
            continue
        lowered = key.strip().lower()
        result[_ALIASES.get(lowered, lowered)] = value
    return result


def _blank(value: Optional[Any]) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _as_int(value: Any) -> int:
    """Parse an integer metric, accepting integral floats such as "12.0"."""
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"expected an integer, got {value!r}")
    return int(number)

