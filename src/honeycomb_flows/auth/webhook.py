"""Webhook authentication — shared-secret check for inbound trigger callbacks."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping

from honeycomb_flows.plugins.contracts.key_value import KeyValuePlugin
from honeycomb_flows.services.recipient_service import SECRET_KEY
from honeycomb_flows.utils.crypto import Crypto

logger = logging.getLogger(__name__)

SECRET_QUERY_PARAM = "secret"
SECRET_HEADER = "X-Honeycomb-Webhook-Token"


class WebhookUnauthenticatedError(Exception):
    """Raised when the presented secret is missing or does not match."""


class SecretExtractor(ABC):
    """Pulls the presented secret out of an inbound request."""

    @abstractmethod
    def extract(
        self, query: Mapping[str, str], headers: Mapping[str, str],
    ) -> str | None:
        """Return the presented secret, or None if the request carries none."""


class QuerySecretExtractor(SecretExtractor):
    """Secret carried in the callback URL's query string."""

    def __init__(self, param: str = SECRET_QUERY_PARAM) -> None:
        self._param = param

    def extract(
        self, query: Mapping[str, str], headers: Mapping[str, str],
    ) -> str | None:
        return query.get(self._param) or None


class HeaderSecretExtractor(SecretExtractor):
    """Secret carried in a request header (Honeycomb's webhook token header)."""

    def __init__(self, header: str = SECRET_HEADER) -> None:
        self._header = header

    def extract(
        self, query: Mapping[str, str], headers: Mapping[str, str],
    ) -> str | None:
        return headers.get(self._header) or None


def build_extractor(source: str) -> SecretExtractor:
    """Map the ``webhook_secret_source`` setting to an extractor.

    Raises:
        ValueError: If the source is not ``query`` or ``header``.
    """
    if source == "query":
        return QuerySecretExtractor()
    if source == "header":
        return HeaderSecretExtractor()
    raise ValueError(f"Unknown webhook secret source: {source}")


class WebhookAuthenticator:
    """Validates inbound callbacks against the stored webhook secret.

    The secret is a capability token: no timestamp or replay window,
    so it stays valid until the recipient is drained.
    """

    def __init__(self, store: KeyValuePlugin, extractor: SecretExtractor) -> None:
        self._store = store
        self._extractor = extractor

    @staticmethod
    def authenticate(presented: str | None, stored: str | None) -> bool:
        """Fail closed: both secrets must be present and equal."""
        if not presented or not stored:
            return False
        return Crypto.secrets_match(presented, stored)

    async def require(
        self, query: Mapping[str, str], headers: Mapping[str, str],
    ) -> None:
        """Check the request's secret before anything reads its body.

        Raises:
            WebhookUnauthenticatedError: If the secret is missing or wrong.
        """
        presented = self._extractor.extract(query, headers)
        stored = await self._store.get(SECRET_KEY)
        if not self.authenticate(presented, stored):
            logger.warning("Rejected webhook: invalid secret")
            raise WebhookUnauthenticatedError("Unauthorized: Invalid webhook secret")
