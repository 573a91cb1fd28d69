"""Rendering and export of the pod update report (JSON or fixed-width table)."""

from __future__ import annotations

import json
import logging
import sys
from typing import List, Optional, Sequence

from analysis.update_report import Report, ReportRow, Status
from common.text import pad_right, truncate_middle
from constants import Constants

logger = logging.getLogger(__name__)

_STATUS_GLYPHS = {
    Status.UP_TO_DATE: ("🟢", "OK "),
    Status.OUTDATED: ("🟡", "OLD"),
    Status.NOT_INSTALLED: ("⚪️", "NA "),
    Status.UNKNOWN: ("🔘", "UNK"),
}


def _cell(value: Optional[str], width: int) -> str:
    return pad_right(truncate_middle(value if value is not None else Constants.EMPTY_CELL, width), width)


def format_row(values: Sequence[Optional[str]], widths: Optional[Sequence[int]] = None) -> str:
    widths = widths or Constants.TABLE_WIDTHS
    return "  ".join(_cell(v, w) for v, w in zip(values, widths))


def line_width(widths: Optional[Sequence[int]] = None) -> int:
    widths = widths or Constants.TABLE_WIDTHS
    return sum(widths) + (len(widths) - 1) * 2


def status_glyph(status: Status, no_emoji: bool = False) -> str:
    emoji, plain = _STATUS_GLYPHS[status]
    return plain if no_emoji else emoji


def update_glyph(would_update: bool, no_emoji: bool = False) -> str:
    if not would_update:
        return Constants.EMPTY_CELL
    return "UPD" if no_emoji else "✅"


def _locked_cell(row: ReportRow) -> str:
    if row.locked is not None:
        return row.locked
    if row.locked_sha is not None:
        return row.locked_sha[:7]
    return Constants.EMPTY_CELL


def render_table(report: Report, no_emoji: bool = False) -> str:
    """Render the report as a fixed-width table, one line per pod."""
    lines: List[str] = [
        format_row(Constants.TABLE_HEADERS) + "  Note",
        Constants.EMPTY_CELL * (line_width() + 2 + 4),
    ]
    for row in report.rows:
        lines.append(format_row([
            row.name,
            _locked_cell(row),
            row.constraint,
            row.source,
            row.latest_satisfying,
            row.latest,
            update_glyph(row.would_update, no_emoji),
            status_glyph(row.status, no_emoji),
        ]) + "  " + (row.note or ""))
    return "\n".join(lines) + "\n"


def render_json(report: Report) -> str:
    """Serialize the report with stable, sorted keys."""
    return json.dumps(report.to_dict(), indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def export_report(report: Report, fmt: str = "table", path: Optional[str] = None,
                  no_emoji: bool = False) -> None:
    """Write the rendered report to ``path`` or stdout.

    Raises:
        OSError: If the output file cannot be written.
    """
    content = render_json(report) if fmt == "json" else render_table(report, no_emoji=no_emoji)
    if path:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.info("Report has been successfully exported at: %s", path)
    else:
        sys.stdout.write(content)
        sys.stdout.flush()
