from __future__ import annotations

from typing import Any


class RestError(Exception):
    """A failed REST call: transport failure (code 500) or an HTTP status >= 400.

    `msg` is the response body for HTTP failures, so it may be a string or,
    for client-side checks, a short description.
    """

    def __init__(self, code: int, msg: Any):
        super().__init__(code, msg)
        self.code = int(code)
        self.msg = msg

    def __str__(self) -> str:
        return f"{self.code}: {self.msg}"
