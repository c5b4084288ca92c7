"""Test helpers for family lifecycle tests.

Helpers:
    FakeTimeAuthority: Controllable clock for deterministic tests

Usage:
    from tests.helpers import FakeTimeAuthority
"""

from tests.helpers.fake_time_authority import FakeTimeAuthority

__all__ = ["FakeTimeAuthority"]
