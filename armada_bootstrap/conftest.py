pytest_plugins = ["armada_bootstrap.testing.ledger"]
