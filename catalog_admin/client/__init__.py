"""Client side of the catalog admin API.

Example usage:
    from catalog_admin.client import CatalogAPIClient, ProductFeed

    client = CatalogAPIClient("http://localhost:8000")
    feed = ProductFeed(client)
    await feed.set_criteria(search="serum")
"""

from catalog_admin.client.api_client import APIError, APIResponse, CatalogAPIClient
from catalog_admin.client.feed import FeedCriteria, FeedState, FetchToken, ProductFeed

__all__ = [
    "APIError",
    "APIResponse",
    "CatalogAPIClient",
    "FeedCriteria",
    "FeedState",
    "FetchToken",
    "ProductFeed",
]
