"""
Currency decimal places lookup.

The table maps ISO 4217 currency codes to the number of decimal places of
their minor unit. It is loaded once at startup and treated as read-only.
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)


DEFAULT_CURRENCY_TABLE = Path(__file__).with_name("currency.json")


def load_currency_table(path: Path | None = None) -> Mapping[str, int]:
    """
    Load a currency decimal places table from a JSON file.

    Args:
        path: JSON object of ``{"CODE": places}``; the bundled ISO 4217
            table is used when omitted

    Returns:
        Read-only mapping of currency code to decimal places

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a valid table
    """
    path = path or DEFAULT_CURRENCY_TABLE
    if not path.exists():
        raise FileNotFoundError(f"Currency table not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Currency table must be a JSON object: {path}")

    for code, places in raw.items():
        # bool is an int subclass
        if not isinstance(places, int) or isinstance(places, bool) or places < 0:
            raise ValueError(
                f"Invalid decimal places for currency {code}: {places!r}"
            )

    logger.info(f"Loaded {len(raw)} currencies from {path}")
    return MappingProxyType(dict(raw))
