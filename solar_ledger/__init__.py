"""Solar Ledger: financial ledger aggregation engine for the back office."""
