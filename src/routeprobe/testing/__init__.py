"""Test utilities for routeprobe applications.

    from routeprobe.testing import TestClient
"""

from routeprobe.testing.client import TestClient

__all__ = ["TestClient"]
