"""Write the active calendar's CSV rows to disk."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

EXPORT_FAILED = "Error: Failed to export calendar due to I/O error."


def export_to_csv(csv_lines: list[str], file_path: str | Path) -> str:
    """Write one line per row and report the outcome as result text."""
    path = Path(file_path)
    try:
        path.write_text("".join(f"{line}\n" for line in csv_lines), encoding="utf-8")
    except OSError as e:
        logger.warning(f"Export to {path} failed: {e}")
        return EXPORT_FAILED

    logger.info(f"Exported {len(csv_lines) - 1} events to {path}")
    return f"Calendar exported successfully to {file_path}"


__all__ = ["EXPORT_FAILED", "export_to_csv"]
