"""Configuration loading — genesis.json discovery and tool settings."""
