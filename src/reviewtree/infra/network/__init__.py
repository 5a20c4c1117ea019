from __future__ import annotations

"""
Network Communication Infrastructure.

Exposes the HTTP client used to pull change-record batches from a remote
collector.
"""

from reviewtree.infra.network.batch_client import fetch_change_batch
from reviewtree.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT

__all__ = [
    "fetch_change_batch",
    "DEFAULT_TIMEOUT",
    "USER_AGENT",
]
