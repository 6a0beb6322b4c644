"""
Static blocklist of tokens excluded from pricing.

The list is a JSON array of composite token keys (``<address>_<tokenId>``).
A copy ships with the package; a different file can be passed by path.
"""

from __future__ import annotations

import json
import logging
import os
from importlib import resources

logger = logging.getLogger("tez_market.blocklist")

BLOCKLIST_RESOURCE = "tokens_blocked.json"


class BlocklistError(Exception):
    """Raised when the blocklist file cannot be read or has the wrong shape."""
    pass


def load_blocklist(path: str | os.PathLike[str] | None = None) -> frozenset[str]:
    """
    Load the token blocklist.

    Args:
        path: JSON file to read. Uses the packaged blocklist when omitted.

    Returns:
        frozenset[str]: composite token keys
    """
    try:
        if path is None:
            raw = (resources.files("tez_market") / "data" / BLOCKLIST_RESOURCE).read_text()
            source = f"package:{BLOCKLIST_RESOURCE}"
        else:
            with open(path, encoding="utf-8") as f:
                raw = f.read()
            source = os.fspath(path)
        entries = json.loads(raw)
    except (OSError, json.JSONDecodeError) as e:
        raise BlocklistError(f"Failed to load blocklist: {e}") from e

    if not isinstance(entries, list) or not all(isinstance(entry, str) for entry in entries):
        raise BlocklistError(f"Blocklist {source} must be a JSON array of strings.")

    logger.debug(f"Loaded {len(entries)} blocked tokens from {source}")
    return frozenset(entries)
