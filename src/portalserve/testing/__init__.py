"""Test utilities for portalserve applications::

    from portalserve.testing import TestClient
"""

from portalserve.testing.client import TestClient

__all__ = ["TestClient"]
