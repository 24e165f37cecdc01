"""Shared utilities for fluent-assertions (configuration, environment, IO)."""
