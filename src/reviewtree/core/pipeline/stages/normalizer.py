from __future__ import annotations

"""
Record Normalization Stage.

Acts as the validation boundary of the pipeline: converts untrusted raw
entries (as delivered by a scraper or a remote source) into well-typed
ChangeRecords. Malformed entries are dropped and logged; a bad entry never
aborts the batch. Nothing downstream of this stage can fail on input data.
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from reviewtree.domain.constants import (
    DUPLICATE_POLICIES,
    DUPLICATES_ACCUMULATE,
    DUPLICATES_LAST_WINS,
    MAGNITUDE_FIELDS,
    PATH_FIELDS,
    PATH_SEPARATOR,
    REVIEWED_FIELDS,
    THOUSANDS_SEPARATOR,
)
from reviewtree.domain.records import ChangeRecord

logger = logging.getLogger(__name__)

_INTEGER_RX = re.compile(r"^[+-]?[0-9]+$")
_MISSING = object()


class InvalidEntry(ValueError):
    """Raised internally when a raw entry cannot be coerced."""


@dataclass(frozen=True)
class NormalizationReport:
    """
    Outcome of normalizing one raw batch.

    Attributes:
        records: Valid records, in input order.
        rejected: Number of dropped entries.
        duplicates: Paths that occurred more than once (sorted).
    """
    records: List[ChangeRecord] = field(default_factory=list)
    rejected: int = 0
    duplicates: List[str] = field(default_factory=list)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def normalize_records(
        entries: Iterable[Any],
        *,
        duplicate_policy: str = DUPLICATES_ACCUMULATE,
) -> NormalizationReport:
    """
    Validate and coerce a batch of raw entries.

    Args:
        entries: Raw entries shaped like {path, magnitude, reviewed}.
        duplicate_policy: 'accumulate' keeps every occurrence of a repeated
                          path; 'last_wins' keeps only the last one.

    Returns:
        NormalizationReport: Accepted records and rejection statistics.

    Raises:
        ValueError: If the duplicate policy is unknown.
    """
    if duplicate_policy not in DUPLICATE_POLICIES:
        raise ValueError(
            f"Unknown duplicate policy '{duplicate_policy}'. Expected one of {DUPLICATE_POLICIES}."
        )

    records: List[ChangeRecord] = []
    rejected = 0

    for index, entry in enumerate(entries):
        try:
            records.append(normalize_entry(entry))
        except InvalidEntry as e:
            rejected += 1
            logger.warning(f"Rejected entry #{index}: {e}")

    counts = Counter(r.path for r in records)
    duplicates = sorted(p for p, n in counts.items() if n > 1)
    for path in duplicates:
        logger.warning(f"Duplicate path '{path}' occurs {counts[path]} times.")

    if duplicates and duplicate_policy == DUPLICATES_LAST_WINS:
        records = _keep_last_occurrence(records)

    if rejected:
        logger.info(f"Normalization dropped {rejected} malformed entries; {len(records)} accepted.")
    else:
        logger.debug(f"Normalization accepted {len(records)} entries.")

    return NormalizationReport(records=records, rejected=rejected, duplicates=duplicates)


def normalize_entry(entry: Any) -> ChangeRecord:
    """
    Coerce a single raw entry into a ChangeRecord.

    Args:
        entry: A mapping with path, magnitude and reviewed fields.

    Returns:
        ChangeRecord: The validated record.

    Raises:
        InvalidEntry: If any field is missing or cannot be coerced.
    """
    if not isinstance(entry, Mapping):
        raise InvalidEntry(f"expected a mapping, received {type(entry).__name__}")

    path = _parse_path(_first_field(entry, PATH_FIELDS))
    magnitude = parse_magnitude(_first_field(entry, MAGNITUDE_FIELDS))
    reviewed = _parse_reviewed(_first_field(entry, REVIEWED_FIELDS))

    return ChangeRecord(path=path, magnitude=magnitude, reviewed=reviewed)


def parse_magnitude(value: Any) -> int:
    """
    Parse a change magnitude given as number or text.

    Thousands separators are stripped; any non-integer token (such as the
    'BIN' marker used for binary files) is rejected rather than read as 0.

    Raises:
        InvalidEntry: If the value is not a base-10 integer.
    """
    if value is _MISSING or value is None:
        raise InvalidEntry("missing magnitude")
    if isinstance(value, bool):
        raise InvalidEntry(f"boolean magnitude {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise InvalidEntry(f"non-integral magnitude {value!r}")
    if isinstance(value, str):
        text = value.strip().replace(THOUSANDS_SEPARATOR, "")
        if _INTEGER_RX.match(text):
            return int(text, 10)
        raise InvalidEntry(f"unparsable magnitude {value!r}")

    raise InvalidEntry(f"magnitude of type {type(value).__name__}")

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _first_field(entry: Mapping[str, Any], names: Tuple[str, ...]) -> Any:
    for name in names:
        if name in entry:
            return entry[name]
    return _MISSING


def _parse_path(value: Any) -> str:
    if value is _MISSING or value is None:
        raise InvalidEntry("missing path")
    if not isinstance(value, str):
        raise InvalidEntry(f"path of type {type(value).__name__}")

    path = value.strip().strip(PATH_SEPARATOR)
    if not path:
        raise InvalidEntry("empty path")
    if any(not seg for seg in path.split(PATH_SEPARATOR)):
        raise InvalidEntry(f"empty segment in path {value!r}")
    return path


def _parse_reviewed(value: Any) -> bool:
    if value is _MISSING or value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        s = value.strip().lower()
        if s in ("true", "yes", "1"):
            return True
        if s in ("false", "no", "0", ""):
            return False

    raise InvalidEntry(f"unparsable reviewed flag {value!r}")


def _keep_last_occurrence(records: List[ChangeRecord]) -> List[ChangeRecord]:
    """Collapse repeated paths to their last record, at the first position seen."""
    latest: Dict[str, ChangeRecord] = {}
    order: List[str] = []
    for record in records:
        if record.path not in latest:
            order.append(record.path)
        latest[record.path] = record
    return [latest[p] for p in order]
