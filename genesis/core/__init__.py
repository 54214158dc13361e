"""Core domain: models, configuration, persistence, services, use cases."""
