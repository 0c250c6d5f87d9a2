"""CSV and JSON export of a processed view."""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union

from dbviewer.core.exceptions import ErrorCodes, ExportError
from dbviewer.logging import get_logger
from dbviewer.tabular.engine import ProcessedView, cell_to_text

logger = get_logger("tabular.export")


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"


@dataclass(frozen=True)
class ExportArtifact:
    """A downloadable export."""
    filename: str
    mime_type: str
    content: str

    def write(self, directory: Union[str, Path]) -> Path:
        """Write the artifact into ``directory`` and return its path."""
        path = Path(directory) / self.filename
        path.write_text(self.content, encoding="utf-8")
        return path


def to_csv(columns: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Render rows as CSV.

    Every value is wrapped in double quotes. Embedded quotes are not
    escaped, so values containing ``"`` produce ambiguous output.
    """
    lines = [",".join(columns)]
    for row in rows:
        lines.append(",".join(f'"{cell_to_text(value)}"' for value in row))
    return "\n".join(lines)


def to_json(columns: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Render rows as a JSON array of objects keyed by column name.

    Values keep their types; a repeated column name keeps its last value.
    """
    records = [dict(zip(columns, row)) for row in rows]
    return json.dumps(records, indent=2, default=str)


def export_view(
    view: ProcessedView,
    fmt: Union[str, ExportFormat],
    selected_rows: Optional[Iterable[int]] = None,
) -> ExportArtifact:
    """Export the selected rows, or every row of the view when none are selected.

    Args:
        view: Processed view to export
        fmt: ``csv`` or ``json``
        selected_rows: Indices into ``view.rows``

    Returns:
        The export artifact

    Raises:
        ExportError: If ``fmt`` is not a supported format
    """
    try:
        export_format = ExportFormat(fmt.lower() if isinstance(fmt, str) else fmt)
    except ValueError as e:
        raise ExportError(
            f"Unsupported export format: {fmt}",
            code=ErrorCodes.UNSUPPORTED_EXPORT_FORMAT,
            context={"format": str(fmt), "supported_formats": [f.value for f in ExportFormat]},
            cause=e,
        ) from e

    rows: List[Any] = view.selected(list(selected_rows or ()))
    if export_format is ExportFormat.CSV:
        artifact = ExportArtifact("table-data.csv", "text/csv", to_csv(view.columns, rows))
    else:
        artifact = ExportArtifact("table-data.json", "application/json", to_json(view.columns, rows))

    logger.info("View exported", format=export_format.value, row_count=len(rows))
    return artifact
