"""
Request context.

A `RestContext` names the tenant a caller talks to and the user it acts as. It is
created and owned by the caller and passed into every wrapper function; the
dispatch layer fills its cookie jar lazily on first use (see `oae_rest.core.http`).

Anonymous contexts simply leave `username` unset.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from http.cookiejar import CookieJar
from typing import Any, Callable, Mapping

import httpx

from oae_rest.config.settings import Settings


@dataclass
class RestContext:
    """Base host, credentials and session state for REST calls."""

    host: str
    username: str | None = None
    user_password: str | None = None
    host_header: str | None = None
    referer_header: str | None = None
    additional_headers: dict[str, str] | None = None
    strict_ssl: bool = True
    follow_redirects: bool = True
    timeout_seconds: float | None = None
    cookie_jar: CookieJar | None = None
    transport: httpx.BaseTransport | None = field(default=None, repr=False)
    event_hooks: Mapping[str, list[Callable[..., Any]]] | None = field(default=None, repr=False)
    session_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self.host = self.host.rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "RestContext":
        """Build a context from the `rest` settings section; keyword overrides win."""
        rest = settings.rest
        values: dict[str, Any] = {
            "host": rest.host,
            "username": rest.username,
            "user_password": rest.password,
            "host_header": rest.host_header,
            "referer_header": rest.referer_header,
            "strict_ssl": rest.strict_ssl,
            "follow_redirects": rest.follow_redirects,
            "timeout_seconds": settings.app.http_timeout_seconds,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def is_anonymous(self) -> bool:
        return not self.username

    def reset_session(self) -> None:
        """Forget the current session; the next request logs in again."""
        self.cookie_jar = None
