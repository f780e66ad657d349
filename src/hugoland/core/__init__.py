"""Shared primitives used by every layer."""
