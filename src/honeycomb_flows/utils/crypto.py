"""Cryptographic helpers for webhook secrets and recipient names."""

from __future__ import annotations

import hmac
import secrets
import uuid

_SECRET_BYTES = 32


class Crypto:
    """Static helpers for secret generation and comparison."""

    @staticmethod
    def generate_webhook_secret() -> str:
        """Generate a 64-character hex secret from 32 random bytes."""
        return secrets.token_hex(_SECRET_BYTES)

    @staticmethod
    def generate_recipient_name(prefix: str) -> str:
        """Generate a unique ``<prefix>-<uuid4>`` recipient name."""
        return f"{prefix}-{uuid.uuid4()}"

    @staticmethod
    def secrets_match(presented: str, stored: str) -> bool:
        """Constant-time string comparison."""
        return hmac.compare_digest(presented.encode(), stored.encode())
