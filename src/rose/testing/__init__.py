"""Test utilities for rose applications.

    from rose.testing import TestClient
"""

from rose.testing.client import TestClient

__all__ = ["TestClient"]
