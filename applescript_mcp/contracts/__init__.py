"""Typed data shapes shared across the registry, server and transports."""
