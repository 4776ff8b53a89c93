"""Load and save the ledger text file."""

from __future__ import annotations

import logging
from pathlib import Path

from finance_hub.config import LedgerConfig
from finance_hub.exceptions import CorruptLedgerError
from finance_hub.persistence.codec import decode, encode
from finance_hub.store import LedgerStore

logger = logging.getLogger(__name__)


def load_ledger(
    path: str | Path,
    config: LedgerConfig | None = None,
    encoding: str = "utf-8",
) -> LedgerStore:
    """Read a ledger file, or return an empty store when there is none.

    Raises
    ------
    CorruptLedgerError
        If the file exists but does not decode completely.
    """
    config = config or LedgerConfig()
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding=encoding)
    except FileNotFoundError:
        logger.info("No existing data file found at %s. Starting with empty ledger", file_path)
        return LedgerStore.from_config(config)
    except UnicodeDecodeError as exc:
        raise CorruptLedgerError(f"{file_path} is not valid {encoding} text") from exc

    store = decode(text, config)
    logger.info(
        "Loaded %d accounts and %d transactions from %s",
        len(store),
        len(store.transactions),
        file_path,
    )
    return store


def save_ledger(store: LedgerStore, path: str | Path, encoding: str = "utf-8") -> None:
    """Overwrite ``path`` with the encoded ledger."""
    file_path = Path(path)
    if file_path.parent != Path("."):
        file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding=encoding, newline="\n") as f:
        f.write(encode(store))
    logger.info(
        "Saved %d accounts and %d transactions to %s",
        len(store),
        len(store.transactions),
        file_path,
    )
