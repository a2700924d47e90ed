"""Adapters – bind guard4j ports to concrete backends."""
