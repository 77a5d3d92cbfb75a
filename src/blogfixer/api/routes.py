"""API routes for Blogfixer."""

from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from blogfixer import __version__
from blogfixer.api.models import (
    ConnectionRequest,
    ConnectionResponse,
    HealthResponse,
    ProcessRequest,
)
from blogfixer.clients.shopify import ShopifyClient, ShopifyError, normalize_store_url
from blogfixer.config import Settings, get_settings
from blogfixer.models import EventType, LogEvent, encode_sse
from blogfixer.services.processor import ArticleProcessor
from blogfixer.utils.logging import get_logger
from blogfixer.utils.ratelimit import RateLimiter

logger = get_logger(__name__)

router = APIRouter(prefix="/api/shopify", tags=["shopify"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@router.post(
    "/test",
    response_model=ConnectionResponse,
    response_model_exclude_none=True,
)
async def test_connection(
    request: ConnectionRequest,
    settings: Settings = Depends(get_settings),
) -> ConnectionResponse:
    """Check that a store URL and access token can read the shop.

    Credential problems are reported in the body with `success: false`
    rather than as an HTTP error, so the form can show them inline.
    """
    if not request.store_url.strip() or not request.access_token.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Store URL and Access Token are required",
        )

    store = normalize_store_url(request.store_url)
    logger.info("Testing connection", store=store)
    try:
        async with ShopifyClient(
            request.store_url,
            request.access_token,
            api_version=settings.shopify_api_version,
            timeout=settings.request_timeout,
        ) as shopify:
            shop = await shopify.get_shop()
    except ShopifyError as e:
        if e.status_code is not None:
            error = f"Connection failed: {e.status_code}"
        else:
            error = e.reason
        logger.warning("Connection test failed", store=store, error=error)
        return ConnectionResponse(success=False, error=error)

    logger.info("Connection test succeeded", shop=shop.name, domain=shop.domain)
    return ConnectionResponse(success=True, shop_name=shop.name, domain=shop.domain)


@router.post("/process")
async def process(
    request: ProcessRequest,
    settings: Settings = Depends(get_settings),
) -> StreamingResponse:
    """Scan the store's blog articles and stream progress as server-sent events.

    Each event is a `data:` line holding either `{log, type}` or, last, the
    `{results}` summary. In dry-run mode nothing is written to the store.
    """
    limit = request.limit or settings.default_limit
    logger.info("Process endpoint called", mode=request.mode.value, limit=limit)

    async def event_stream() -> AsyncIterator[str]:
        try:
            shopify = ShopifyClient(
                request.store_url,
                request.access_token,
                api_version=settings.shopify_api_version,
                timeout=settings.request_timeout,
            )
        except ShopifyError as e:
            yield encode_sse(LogEvent(f"Error: {e}", EventType.ERROR))
            return

        async with shopify:
            processor = ArticleProcessor(
                shopify_client=shopify,
                rate_limiter=RateLimiter(settings.write_rate_per_second),
                page_size=settings.articles_page_size,
            )
            async for event in processor.stream(mode=request.mode, limit=limit):
                yield encode_sse(event)

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
