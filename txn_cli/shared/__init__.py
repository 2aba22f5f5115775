"""Shared helpers (configuration, logging, CLI plumbing) for txn-parse."""
