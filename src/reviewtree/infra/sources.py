from __future__ import annotations

"""
Record Source Capabilities.

A record source is a zero-argument callable that delivers one complete
batch of raw entries, either directly (a sequence, or None when nothing is
available) or as a concurrent.futures.Future resolving to one. The engine
receives a source as a parameter and never reaches out to global state.
"""

import json
import logging
import os
from concurrent.futures import Future
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from reviewtree.domain.errors import RecordSourceError
from reviewtree.infra.network import DEFAULT_TIMEOUT, fetch_change_batch

logger = logging.getLogger(__name__)

RawEntry = Mapping[str, Any]
RawBatch = Optional[Sequence[RawEntry]]
RecordSource = Callable[[], Union[RawBatch, "Future[RawBatch]"]]

# Object payloads may wrap the entry list under one of these keys
_BATCH_KEYS = ("entries", "files", "records")

# -----------------------------------------------------------------------------
# SOURCE FACTORIES
# -----------------------------------------------------------------------------

def static_source(entries: RawBatch) -> RecordSource:
    """Wrap an in-memory batch (or None) as a record source."""
    def _source() -> RawBatch:
        return None if entries is None else list(entries)
    return _source


def json_file_source(path: str) -> RecordSource:
    """
    Read a batch from a UTF-8 JSON file.

    The file holds either an array of entries or an object wrapping the
    array under 'entries', 'files' or 'records'.

    Raises (when called):
        RecordSourceError: If the file is missing, unreadable or malformed.
    """
    def _source() -> RawBatch:
        if not os.path.isfile(path):
            raise RecordSourceError(f"Batch file not found: {path}")
        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            raise RecordSourceError(f"Cannot read batch file '{path}': {e}") from e

        logger.debug(f"Loaded batch file: {path}")
        return unwrap_batch(payload)
    return _source


def http_source(url: str, timeout: float = DEFAULT_TIMEOUT) -> RecordSource:
    """Fetch a batch over HTTP; transport failures yield None (no data)."""
    def _source() -> RawBatch:
        payload = fetch_change_batch(url, timeout=timeout)
        if payload is None:
            return None
        return unwrap_batch(payload)
    return _source


def source_from_config(cfg: Dict[str, Any]) -> Optional[RecordSource]:
    """
    Select the record source described by a validated configuration.

    A local file takes precedence over a URL.

    Returns:
        Optional[RecordSource]: The source, or None if none is configured.
    """
    if cfg.get("input_path"):
        return json_file_source(cfg["input_path"])
    if cfg.get("source_url"):
        return http_source(cfg["source_url"], timeout=cfg.get("source_timeout", DEFAULT_TIMEOUT))
    return None

# -----------------------------------------------------------------------------
# PAYLOAD HELPERS
# -----------------------------------------------------------------------------

def unwrap_batch(payload: Any) -> RawBatch:
    """
    Extract the list of raw entries from a decoded JSON payload.

    Returns None when the payload is null. Individual entries are not
    validated here; that is the normalizer's job.

    Raises:
        RecordSourceError: If the payload has no recognizable entry list.
    """
    if payload is None:
        return None
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in _BATCH_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    raise RecordSourceError(
        f"Unrecognized batch payload of type {type(payload).__name__}; "
        f"expected a list or an object with one of {_BATCH_KEYS}."
    )


def as_entry_list(batch: Any) -> List[Any]:
    """Materialize a delivered batch into a list."""
    if isinstance(batch, (str, bytes)) or isinstance(batch, Mapping):
        raise RecordSourceError(f"Batch must be a sequence of entries, not {type(batch).__name__}.")
    try:
        return list(batch)
    except TypeError as e:
        raise RecordSourceError(f"Batch is not iterable: {e}") from e
