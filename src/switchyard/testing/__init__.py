"""Test utilities for switchyard applications::

    from switchyard.testing import SyncTestClient, TestClient
"""

from switchyard.testing.client import SyncTestClient, TestClient

__all__ = ["SyncTestClient", "TestClient"]
