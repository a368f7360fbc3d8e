"""Test utilities for simplevc applications.

Provides a synchronous test client, direct action execution, and
response assertions::

    from simplevc.testing import TestClient, assert_response_ok
"""

from simplevc.testing.assertions import (
    assert_response_contains,
    assert_response_empty,
    assert_response_header,
    assert_response_matches,
    assert_response_not_contains,
    assert_response_not_empty,
    assert_response_not_found,
    assert_response_ok,
    assert_response_redirect,
    assert_response_server_error,
    assert_response_status,
)
from simplevc.testing.client import TestClient
from simplevc.testing.controller import build_path, execute_action

__all__ = [
    "TestClient",
    "assert_response_contains",
    "assert_response_empty",
    "assert_response_header",
    "assert_response_matches",
    "assert_response_not_contains",
    "assert_response_not_empty",
    "assert_response_not_found",
    "assert_response_ok",
    "assert_response_redirect",
    "assert_response_server_error",
    "assert_response_status",
    "build_path",
    "execute_action",
]
