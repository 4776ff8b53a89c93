"""Finance Hub: single-user bank ledger with flat-file persistence."""

__version__ = "0.1.0"
