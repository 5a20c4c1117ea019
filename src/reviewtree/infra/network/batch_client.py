from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from reviewtree.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


def fetch_change_batch(url: str, timeout: float = DEFAULT_TIMEOUT) -> Optional[Any]:
    """
    Download one complete batch of raw change entries as JSON.

    Returns the decoded payload when it is a list or an object, and None on
    any transport, HTTP or decoding failure (logged). A None result is
    reported by the engine as 'no data'.
    """
    headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    logger.debug(f"Requesting change batch from: {url}")

    try:
        response = requests.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()

        data = response.json()

        if not isinstance(data, (list, dict)):
            logger.warning("Network: Received malformed change batch (root is neither list nor object).")
            return None

        size_kb = len(response.content) / 1024
        logger.info(f"Network: Change batch received ({size_kb:.1f} KB).")
        return data

    except requests.exceptions.Timeout:
        logger.warning(f"Network: Change batch request timed out after {timeout}s.")
    except requests.exceptions.RequestException as e:
        logger.error(f"Network: Communication error while fetching change batch: {e}")
    except ValueError as e:
        logger.error(f"Network: Change batch is not valid JSON: {e}")

    return None
