from __future__ import annotations

"""
Flat Export Serialization.

Renders the export view as spreadsheet-ready delimited text: UTF-8 with a
leading byte-order mark, comma separated, header row first, one row per
file leaf in display order.
"""

import csv
import io
import logging
from typing import Iterable

from reviewtree.domain.constants import EXPORT_ENCODING, EXPORT_FALSE, EXPORT_HEADER, EXPORT_TRUE
from reviewtree.domain.view_models import ExportRow
from reviewtree.infra.fs import write_bytes

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_export_csv(rows: Iterable[ExportRow]) -> bytes:
    """
    Serialize export rows to the exact bytes of the CSV artifact.

    Uses the csv 'excel' dialect (CRLF line endings, minimal quoting) and
    renders the review flag as 'true'/'false'.

    Args:
        rows: Export rows, already in display order.

    Returns:
        bytes: UTF-8 encoded text including the BOM.
    """
    buffer = io.StringIO(newline="")
    writer = csv.writer(buffer, dialect="excel")
    writer.writerow(EXPORT_HEADER)
    for row in rows:
        writer.writerow([
            row.origin_path,
            str(row.magnitude),
            EXPORT_TRUE if row.reviewed else EXPORT_FALSE,
        ])
    return buffer.getvalue().encode(EXPORT_ENCODING)


def write_export_csv(path: str, rows: Iterable[ExportRow]) -> str:
    """
    Render and persist the export artifact.

    Args:
        path: Target file path.
        rows: Export rows, already in display order.

    Returns:
        str: Absolute path of the written file.

    Raises:
        OSError: If the file cannot be written.
    """
    payload = render_export_csv(rows)
    final_path = write_bytes(path, payload)
    logger.info(f"Export saved to file: {final_path} ({len(payload)} bytes)")
    return final_path
