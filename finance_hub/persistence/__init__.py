"""Flat-file persistence of the ledger."""

from finance_hub.persistence.codec import decode, encode
from finance_hub.persistence.file_store import load_ledger, save_ledger

__all__ = ["decode", "encode", "load_ledger", "save_ledger"]
