"""HTTP request and response types used throughout the dispatch pipeline."""

from simplevc.http.request import Request
from simplevc.http.response import Redirect, Response

__all__ = ["Redirect", "Request", "Response"]
