"""Shopify Admin REST API client for Blogfixer."""

from dataclasses import dataclass
from typing import Any

import httpx

from blogfixer.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_API_VERSION = "2024-01"

# Shopify rejects article page sizes above 250
MAX_PAGE_SIZE = 250


class ShopifyError(Exception):
    """Raised when a Shopify request fails or returns a non-2xx status."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        self.reason = reason
        self.status_code = status_code
        super().__init__(reason)


def normalize_store_url(store_url: str) -> str:
    """Reduce a store URL to its bare host, e.g. `my-store.myshopify.com`."""
    clean = store_url.strip()
    for scheme in ("https://", "http://"):
        if clean.startswith(scheme):
            clean = clean[len(scheme):]
            break
    if clean.endswith("/"):
        clean = clean[:-1]
    return clean


@dataclass
class ShopifyShop:
    """Represents the shop behind an access token."""

    name: str
    domain: str

    @classmethod
    def from_api_response(cls, data: dict) -> "ShopifyShop":
        """Create a ShopifyShop from the `shop` object of shop.json."""
        return cls(name=data.get("name", ""), domain=data.get("domain", ""))


@dataclass
class ShopifyBlog:
    """Represents a Shopify blog."""

    id: int
    title: str

    @classmethod
    def from_api_response(cls, data: dict) -> "ShopifyBlog":
        """Create a ShopifyBlog from API response data."""
        return cls(id=data["id"], title=data.get("title") or "")


@dataclass
class ShopifyArticle:
    """Represents a Shopify blog article."""

    id: int
    blog_id: int
    title: str
    content: str

    @classmethod
    def from_api_response(cls, data: dict, blog_id: int) -> "ShopifyArticle":
        """Create a ShopifyArticle from API response data.

        Shopify returns `body_html` for article content; `content` is accepted
        as well since some API versions and proxies use it.
        """
        content = data.get("body_html")
        if content is None:
            content = data.get("content")
        return cls(
            id=data["id"],
            blog_id=data.get("blog_id", blog_id),
            title=data.get("title") or "",
            content=content or "",
        )


class ShopifyClient:
    """Client for the Shopify Admin REST API of a single store."""

    def __init__(
        self,
        store_url: str,
        access_token: str,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
    ) -> None:
        self._store = normalize_store_url(store_url)
        # httpx encodes headers and parses the base URL eagerly
        try:
            self._client = httpx.AsyncClient(
                base_url=f"https://{self._store}/admin/api/{api_version}",
                headers={
                    "X-Shopify-Access-Token": access_token,
                    "Content-Type": "application/json",
                },
                timeout=timeout,
            )
        except (ValueError, httpx.InvalidURL) as e:
            logger.warning("Invalid store URL or access token", store=self._store, error=str(e))
            raise ShopifyError("invalid store URL or access token") from e

    @property
    def store(self) -> str:
        """The normalized store host."""
        return self._store

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "ShopifyClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Send a request and return the decoded JSON body.

        Raises:
            ShopifyError: If the request fails or returns a non-2xx status.
        """
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(
                "Shopify returned an error",
                store=self._store,
                method=method,
                path=path,
                status=status,
            )
            raise ShopifyError(f"HTTP {status}", status_code=status) from e
        except httpx.TimeoutException as e:
            logger.warning("Timeout calling Shopify", store=self._store, path=path)
            raise ShopifyError("timeout") from e
        except httpx.RequestError as e:
            logger.warning("Request error calling Shopify", store=self._store, path=path, error=str(e))
            raise ShopifyError(f"request error: {e}") from e

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise ShopifyError("invalid JSON response", status_code=response.status_code) from e

    async def get_shop(self) -> ShopifyShop:
        """Get the shop the access token belongs to."""
        logger.info("Fetching shop", store=self._store)
        data = await self._request("GET", "/shop.json")
        return ShopifyShop.from_api_response(data.get("shop") or {})

    async def get_blogs(self) -> list[ShopifyBlog]:
        """Get all blogs of the store."""
        logger.info("Fetching blogs", store=self._store)
        data = await self._request("GET", "/blogs.json")
        blogs = [ShopifyBlog.from_api_response(b) for b in data.get("blogs") or []]
        logger.info("Found blogs", count=len(blogs))
        return blogs

    async def get_articles(self, blog_id: int, limit: int = MAX_PAGE_SIZE) -> list[ShopifyArticle]:
        """Get the articles of a blog.

        Args:
            blog_id: The ID of the blog.
            limit: Page size, capped at 250 by Shopify.

        Returns:
            List of ShopifyArticle objects from the first page.
        """
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        logger.info("Fetching articles", store=self._store, blog_id=blog_id, limit=limit)
        data = await self._request(
            "GET", f"/blogs/{blog_id}/articles.json", params={"limit": limit}
        )
        articles = [
            ShopifyArticle.from_api_response(a, blog_id) for a in data.get("articles") or []
        ]
        logger.info("Found articles", blog_id=blog_id, count=len(articles))
        return articles

    async def update_article_content(self, blog_id: int, article_id: int, content: str) -> None:
        """Replace an article's HTML content.

        Raises:
            ShopifyError: If Shopify does not answer with a 2xx status.
        """
        logger.info("Updating article", store=self._store, blog_id=blog_id, article_id=article_id)
        await self._request(
            "PUT",
            f"/blogs/{blog_id}/articles/{article_id}.json",
            json={"article": {"id": article_id, "body_html": content}},
        )
        logger.info("Article updated", blog_id=blog_id, article_id=article_id)
