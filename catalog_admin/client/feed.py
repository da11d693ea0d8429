"""Product feed view-model.

Accumulates product listing pages for an admin screen. Changing the
search text, category filter or sort order restarts the feed at page 1;
"load more" appends the next page.

Listing requests may overlap, for example while a user is typing. Each
request carries a FetchToken, starting a new request cancels every
earlier token, and a response is applied only if its token is still
live. In-flight HTTP calls are not aborted; their results are dropped.
"""

from dataclasses import dataclass, field, replace
from typing import Any

import structlog

from catalog_admin.client.api_client import CatalogAPIClient

logger = structlog.get_logger()

ALL_CATEGORIES = "all"
DEFAULT_FEED_LIMIT = 12


@dataclass(frozen=True)
class FeedCriteria:
    """What the feed is listing.

    Attributes:
        search: Free-text search, empty for none.
        category: Category name, "all" for every category.
        sort: "newest" or "oldest".
        limit: Page size.
    """

    search: str = ""
    category: str = ALL_CATEGORIES
    sort: str = "newest"
    limit: int = DEFAULT_FEED_LIMIT


@dataclass
class FeedState:
    """What the feed currently shows.

    Attributes:
        products: Accumulated product records, in listing order.
        page: Last page applied, 0 before the first load.
        pages: Total pages reported by the server.
        loading: Whether a request is in flight.
        error: Message of the last failed request.
    """

    products: list[dict[str, Any]] = field(default_factory=list)
    page: int = 0
    pages: int = 0
    loading: bool = False
    error: str | None = None


class FetchToken:
    """Cancellation token for one listing request."""

    def __init__(self, sequence: int) -> None:
        self.sequence = sequence
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ProductFeed:
    """Incrementally loaded, filterable product list.

    Example usage:
        feed = ProductFeed(CatalogAPIClient("http://localhost:8000"))
        await feed.refresh()
        await feed.set_criteria(category="Skincare")
        while feed.has_more:
            await feed.load_more()
    """

    def __init__(
        self,
        client: CatalogAPIClient,
        criteria: FeedCriteria | None = None,
    ) -> None:
        """Initialize the feed.

        Args:
            client: API client used for listing requests.
            criteria: Initial criteria, defaults to everything newest-first.
        """
        self.client = client
        self.criteria = criteria or FeedCriteria()
        self.state = FeedState()
        self._sequence = 0
        self._active: FetchToken | None = None

    @property
    def has_more(self) -> bool:
        """Whether another page is available."""
        return self.state.page < self.state.pages

    async def set_criteria(self, **changes: Any) -> bool:
        """Change search/category/sort/limit and reload from page 1.

        Args:
            **changes: FeedCriteria fields to replace.

        Returns:
            True if the response was applied, False if it went stale.
        """
        self.criteria = replace(self.criteria, **changes)
        return await self._fetch(1)

    async def refresh(self) -> bool:
        """Reload page 1 with the current criteria."""
        return await self._fetch(1)

    async def load_more(self) -> bool:
        """Append the next page.

        Does nothing while a request is in flight or when the last page
        has been loaded.

        Returns:
            True if a page was appended.
        """
        if self.state.loading or not self.has_more:
            return False
        return await self._fetch(self.state.page + 1)

    def _issue_token(self) -> FetchToken:
        if self._active is not None:
            self._active.cancel()
        self._sequence += 1
        self._active = FetchToken(self._sequence)
        return self._active

    async def _fetch(self, page: int) -> bool:
        token = self._issue_token()
        criteria = self.criteria
        self.state.loading = True

        try:
            response = await self.client.list_products(
                page=page,
                limit=criteria.limit,
                search=criteria.search or None,
                category=None if criteria.category == ALL_CATEGORIES else criteria.category,
                sort=criteria.sort,
            )
        finally:
            # A superseded request must not clear the flag of the live one
            if not token.cancelled:
                self.state.loading = False

        if token.cancelled:
            logger.debug(
                "Discarding stale product page",
                sequence=token.sequence,
                latest=self._sequence,
                page=page,
            )
            return False

        if not response.success:
            message = response.error.message if response.error else "Unknown error"
            logger.warning("Product feed request failed", page=page, error=message)
            self.state = FeedState(page=1, error=message)
            return True

        items = list(response.data or [])
        products = items if page == 1 else self.state.products + items
        self.state = FeedState(products=products, page=page, pages=response.pages or 0)
        return True
