"""Memoized lookup of the store's Online Store publication."""
import logging
from typing import Optional

from ..shopify.client import ShopifyGraphQLClient
from ..shopify.exceptions import ShopifyClientError, ShopifyGraphQLError
from ..shopify.graphql_strings import QUERY_PUBLICATIONS


logger = logging.getLogger(__name__)

ONLINE_STORE_PUBLICATION_NAME = "Online Store"


class PublicationResolver:
    """Resolve-or-return holder for the Online Store publication id.

    The id is unset at start, set on the first successful lookup and never
    invalidated. A failed lookup leaves it unset.
    """

    def __init__(
        self,
        client: ShopifyGraphQLClient,
        publication_name: str = ONLINE_STORE_PUBLICATION_NAME,
        publication_id: Optional[str] = None,
    ):
        self.client = client
        self.publication_name = publication_name
        self._publication_id = publication_id
        self.lookup_count = 0

    @property
    def publication_id(self) -> Optional[str]:
        return self._publication_id

    async def resolve(self) -> Optional[str]:
        """Return the cached id, querying publications on first use.

        Lookup failures are logged and yield None so products can still be
        created unpublished.
        """
        if self._publication_id:
            return self._publication_id

        self.lookup_count += 1
        try:
            publication_id = await self._lookup()
        except (ShopifyClientError, ShopifyGraphQLError) as exc:
            logger.error("Failed to get publication ID: %s", exc)
            return None

        if publication_id is None:
            logger.warning(
                "No '%s' publication found; products will not be published",
                self.publication_name,
            )
            return None

        self._publication_id = publication_id
        logger.info("Found %s publication ID: %s", self.publication_name, publication_id)
        return publication_id

    async def _lookup(self) -> Optional[str]:
        response = await self.client.execute(QUERY_PUBLICATIONS)
        if response.errors:
            raise ShopifyGraphQLError(response.errors)

        publications = response.data.get("publications") or {}
        for edge in publications.get("edges") or []:
            node = edge.get("node") or {}
            if node.get("name") == self.publication_name:
                return node.get("id")
        return None
