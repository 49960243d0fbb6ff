"""Test utilities for wordchain applications.

::

    from wordchain.testing import TestClient, cookie_values
"""

from wordchain.testing.client import TestClient, cookie_values

__all__ = ["TestClient", "cookie_values"]
