"""Catalog models, broker interface, responses and basic-auth middleware for Open Service Broker API services."""

__version__ = "13.0.0"

__all__ = ["auth", "broker", "catalog", "failures", "responses"]