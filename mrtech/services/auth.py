"""
Admin Authentication Service

Single-password admin login backed by a stateless signed cookie token.

Token format: ``admin.{issued_at_ms}.{hex_hmac_sha256}``

The signature covers ``admin.{issued_at_ms}`` and is keyed by AUTH_SECRET,
which is kept separate from the admin password. Tokens live for a fixed
14 days from issue and are never renewed; there is no server-side store,
so a token stays valid until it ages out.
"""

import hashlib
import hmac
import time
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

TOKEN_MARKER = 'admin'
TOKEN_DELIMITER = '.'
SESSION_MAX_AGE_MS = 1000 * 60 * 60 * 24 * 14
SESSION_MAX_AGE_SECONDS = SESSION_MAX_AGE_MS // 1000


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def timing_safe_equal(a: str, b: str) -> bool:
    """Compare two strings without leaking where they first differ.

    Lengths are checked first and a mismatch returns straight away; only
    same-length inputs go through the constant-time comparison.
    """
    ba = _to_bytes(a)
    bb = _to_bytes(b)
    if len(ba) != len(bb):
        return False
    return hmac.compare_digest(ba, bb)


@dataclass(frozen=True)
class AuthConfig:
    """Admin credentials, loaded once at start-up."""
    admin_password: Optional[str] = None
    signing_key: Optional[str] = None

    @classmethod
    def from_mapping(cls, config: Mapping) -> 'AuthConfig':
        """Build from a Flask config (or any mapping). Empty values count as unset."""
        return cls(
            admin_password=config.get('ADMIN_PASSWORD') or None,
            signing_key=config.get('AUTH_SECRET') or None,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.admin_password) and bool(self.signing_key)


class AdminAuthenticator:
    """Issues and verifies admin session tokens.

    Stateless apart from the immutable config, so one instance is shared
    by every request thread.
    """

    def __init__(self, config: AuthConfig, clock: Callable[[], int] = now_ms):
        self.config = config
        self._clock = clock

    def _sign(self, payload: str) -> Optional[str]:
        key = self.config.signing_key
        if not key:
            return None
        return hmac.new(_to_bytes(key), _to_bytes(payload), hashlib.sha256).hexdigest()

    def verify_password(self, submitted: str) -> bool:
        """Check a submitted password against ADMIN_PASSWORD."""
        expected = self.config.admin_password
        if not expected:
            return False
        if not isinstance(submitted, str):
            return False
        return timing_safe_equal(submitted, expected)

    def issue_token(self) -> Optional[str]:
        """Mint a fresh session token, or None when no signing key is set."""
        issued_at = str(self._clock())
        payload = f'{TOKEN_MARKER}{TOKEN_DELIMITER}{issued_at}'
        sig = self._sign(payload)
        if sig is None:
            return None
        return f'{payload}{TOKEN_DELIMITER}{sig}'

    def verify_token(self, token: Optional[str]) -> bool:
        """Return True only for an untampered, unexpired admin token.

        Every rejection looks the same to the caller, and garbage input
        is rejected rather than raised on.
        """
        if not self.config.signing_key:
            return False
        if not token or not isinstance(token, str):
            return False

        parts = token.split(TOKEN_DELIMITER)
        if len(parts) != 3:
            return False
        marker, issued_at_raw, sig = parts

        expected = self._sign(f'{marker}{TOKEN_DELIMITER}{issued_at_raw}')
        if expected is None:
            return False
        if not timing_safe_equal(sig, expected):
            return False

        issued_at = _parse_timestamp(issued_at_raw)
        if issued_at is None:
            return False

        # Exactly 14 days old is already expired
        if self._clock() - issued_at >= SESSION_MAX_AGE_MS:
            return False

        return marker == TOKEN_MARKER


def _to_bytes(value: str) -> bytes:
    # surrogatepass keeps lone surrogates from raising on hostile input
    return value.encode('utf-8', 'surrogatepass')


def _parse_timestamp(raw: str) -> Optional[int]:
    """Parse a base-10 ms timestamp: ASCII digits with an optional leading '-'."""
    digits = raw[1:] if raw.startswith('-') else raw
    if not digits or not (digits.isascii() and digits.isdigit()):
        return None
    return int(raw, 10)
