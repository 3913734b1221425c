"""Test helpers for the review workflow tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    review_factories: Builders for applications and votes

Usage:
    from tests.helpers import FakeTimeAuthority
"""

from tests.helpers.fake_time_authority import FakeTimeAuthority

__all__ = ["FakeTimeAuthority"]
