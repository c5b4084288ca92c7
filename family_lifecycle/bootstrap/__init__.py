"""Composition root for wiring dependencies.

This package centralizes infrastructure-aware wiring so application code can
depend on ports without importing the in-memory adapters directly.
"""
