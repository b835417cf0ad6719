"""HTTP basic authentication middleware for WSGI applications."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Optional

_NOT_AUTHORIZED = "Not Authorized"
_SCHEME = "basic "
_SEPARATOR = b":"

WSGIApp = Callable[[dict, Callable[..., Any]], Iterable[bytes]]


def _digest(value: bytes) -> bytes:
    return hashlib.sha256(value).digest()


def _basic_auth(environ: Mapping[str, Any]) -> Optional[tuple[bytes, bytes]]:
    header = environ.get("HTTP_AUTHORIZATION", "")
    scheme_length = len(_SCHEME)
    if len(header) < scheme_length or header[:scheme_length].lower() != _SCHEME:
        return None
    try:
        decoded = base64.b64decode(header[scheme_length:], validate=True)
    except (binascii.Error, ValueError):
        return None
    pieces = decoded.split(_SEPARATOR, 1)
    if len(pieces) != 2:
        return None
    return pieces[0], pieces[1]


class Wrapper:
    """Checks basic-auth credentials against a set of accepted users."""

    def __init__(self, users: Mapping[str, str]) -> None:
        self._credentials = [
            (_digest(name.encode()), _digest(phrase.encode()))
            for name, phrase in users.items()
        ]

    def authorized(self, environ: Mapping[str, Any]) -> bool:
        """Return whether the request carries accepted credentials."""
        supplied = _basic_auth(environ)
        if supplied is None:
            return False
        name_sum, phrase_sum = (_digest(part) for part in supplied)
        for name_ok, phrase_ok in self._credentials:
            name_match = hmac.compare_digest(name_ok, name_sum)
            phrase_match = hmac.compare_digest(phrase_ok, phrase_sum)
            if name_match and phrase_match:
                return True
        return False

    def wrap(self, app: WSGIApp) -> WSGIApp:
        """Return a WSGI app that answers 401 unless the request is authorized."""

        def guarded(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
            if not self.authorized(environ):
                body = f"{_NOT_AUTHORIZED}\n".encode()
                start_response(
                    "401 Unauthorized",
                    [
                        ("Content-Type", "text/plain; charset=utf-8"),
                        ("X-Content-Type-Options", "nosniff"),
                        ("Content-Length", str(len(body))),
                    ],
                )
                return [body]
            return app(environ, start_response)

        return guarded


def new_wrapper_multiple(users: Mapping[str, str]) -> Wrapper:
    """Create a wrapper accepting any of the given user/password pairs."""
    return Wrapper(users)


def new_wrapper(username: str, password: str) -> Wrapper:
    """Create a wrapper accepting a single user."""
    return Wrapper({username: password})