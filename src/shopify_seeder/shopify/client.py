"""Async Shopify GraphQL Admin API client for seeding runs."""
import asyncio
import json
import logging
from typing import Optional

import aiohttp

from ..schemas.products import GraphQLResponse, ThrottleStatus
from .exceptions import ShopifyClientError


def _redact(text: str, token: str) -> str:
    if not text or not token:
        return text
    return text.replace(token, "[REDACTED]")


class ShopifyGraphQLClient:
    """Thin request executor against a single Admin GraphQL endpoint.

    Never retries: transport failures surface as ShopifyClientError and
    retry policy belongs to the caller. Application errors (root-level
    ``errors``) are returned on the response, not raised.
    """

    REQUEST_TIMEOUT_SECONDS = 60
    CONNECT_TIMEOUT_SECONDS = 10

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: str,
        session: aiohttp.ClientSession,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the client.

        Args:
            shop_domain: e.g., "mystore.myshopify.com"
            access_token: Admin API access token (never logged)
            api_version: e.g., "2025-04"
            session: Injected aiohttp ClientSession
            logger: Optional logger instance
        """
        self.shop_domain = shop_domain
        self._access_token = access_token
        self.api_version = api_version
        self.session = session
        self.logger = logger or logging.getLogger(__name__)

        self.graphql_endpoint = (
            f"https://{shop_domain}/admin/api/{api_version}/graphql.json"
        )

    async def execute(
        self, document: str, variables: Optional[dict] = None
    ) -> GraphQLResponse:
        """Execute one GraphQL document.

        Args:
            document: GraphQL query or mutation string
            variables: Variable mapping for the document

        Returns:
            GraphQLResponse with data, root errors and throttle status

        Raises:
            ShopifyClientError: On network errors, timeouts, or a response
                body that cannot be parsed as a GraphQL envelope
        """
        headers = {
            "X-Shopify-Access-Token": self._access_token,
            "Content-Type": "application/json",
        }
        payload = {"query": document, "variables": variables or {}}

        try:
            timeout = aiohttp.ClientTimeout(
                total=self.REQUEST_TIMEOUT_SECONDS,
                connect=self.CONNECT_TIMEOUT_SECONDS,
            )
            async with self.session.post(
                self.graphql_endpoint,
                json=payload,
                headers=headers,
                timeout=timeout,
            ) as resp:
                response_text = await resp.text()
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ShopifyClientError(
                f"Network error calling {self.graphql_endpoint}: "
                f"{_redact(str(e), self._access_token)}",
                cause=e,
            ) from e

        body = self._parse_body(response_text)

        if body is None:
            snippet = _redact(response_text[:200], self._access_token)
            if 200 <= status < 300:
                raise ShopifyClientError(
                    f"Unparseable response body (HTTP {status}): {snippet}",
                    status=status,
                )
            raise ShopifyClientError(
                f"HTTP {status} with no parseable body: {snippet}",
                status=status,
            )

        if not 200 <= status < 300:
            self.logger.warning(
                "HTTP %s from Shopify, using error envelope from body", status
            )

        return self._to_response(body)

    @staticmethod
    def _parse_body(response_text: str) -> Optional[dict]:
        """Parse a JSON object body, returning None when it is not one."""
        if not response_text:
            return None
        try:
            body = json.loads(response_text)
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        return body

    @staticmethod
    def _to_response(body: dict) -> GraphQLResponse:
        data = body.get("data")
        raw_errors = body.get("errors") or []
        if isinstance(raw_errors, (str, dict)):
            raw_errors = [raw_errors]
        elif not isinstance(raw_errors, list):
            raise ShopifyClientError(
                f"Unparseable errors field in response: {str(raw_errors)[:200]}"
            )

        errors = []
        for error in raw_errors:
            if isinstance(error, dict):
                errors.append(error)
            else:
                errors.append({"message": str(error)})

        return GraphQLResponse(
            data=data if isinstance(data, dict) else {},
            errors=errors,
            throttle_status=ThrottleStatus.from_extensions(body.get("extensions")),
        )
