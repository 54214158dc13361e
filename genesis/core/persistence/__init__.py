"""Persistence — the genesis.json workspace store."""
