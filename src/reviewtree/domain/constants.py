from __future__ import annotations

"""
Global Domain Constants.

Centralizes the separators, export schema and policy identifiers shared
by the pipeline stages, the export layer and the interfaces.
"""

from typing import Final, Tuple

# -----------------------------------------------------------------------------
# PATH HANDLING
# -----------------------------------------------------------------------------

PATH_SEPARATOR: Final[str] = "/"
THOUSANDS_SEPARATOR: Final[str] = ","

# Aliases accepted by the normalizer (pull-request page scrapers emit filePath/diff)
PATH_FIELDS: Final[Tuple[str, ...]] = ("path", "filePath")
MAGNITUDE_FIELDS: Final[Tuple[str, ...]] = ("magnitude", "diff")
REVIEWED_FIELDS: Final[Tuple[str, ...]] = ("reviewed",)

# -----------------------------------------------------------------------------
# DUPLICATE PATH POLICIES
# -----------------------------------------------------------------------------

DUPLICATES_ACCUMULATE: Final[str] = "accumulate"
DUPLICATES_LAST_WINS: Final[str] = "last_wins"
DUPLICATE_POLICIES: Final[Tuple[str, ...]] = (DUPLICATES_ACCUMULATE, DUPLICATES_LAST_WINS)

# -----------------------------------------------------------------------------
# EXPORT SCHEMA
# -----------------------------------------------------------------------------

EXPORT_HEADER: Final[Tuple[str, str, str]] = ("FilePath", "Magnitude", "Reviewed")
EXPORT_ENCODING: Final[str] = "utf-8-sig"
EXPORT_TRUE: Final[str] = "true"
EXPORT_FALSE: Final[str] = "false"

NO_DATA_MESSAGE: Final[str] = "No change records available."
