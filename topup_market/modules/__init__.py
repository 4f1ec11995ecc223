"""Domain modules: accounts, catalog, transactions and the balance ledger."""
