"""Digital top-up marketplace server with an atomic balance ledger."""

__version__ = "0.1.0"
