"""Article scanning and repair workflow for Blogfixer."""

from collections.abc import AsyncIterator, Awaitable, Callable

from blogfixer.clients.shopify import (
    MAX_PAGE_SIZE,
    ShopifyArticle,
    ShopifyBlog,
    ShopifyClient,
    ShopifyError,
)
from blogfixer.models import (
    ArticleRecord,
    ArticleStatus,
    EventType,
    LogEvent,
    ProcessingMode,
    ProcessingResults,
    ProgressEvent,
    ResultsEvent,
)
from blogfixer.services.analyzer import analyze_article
from blogfixer.services.rewriter import fix_article_content
from blogfixer.utils.logging import get_logger
from blogfixer.utils.ratelimit import RateLimiter

logger = get_logger(__name__)

TITLE_PREVIEW_LENGTH = 50

EventSink = Callable[[ProgressEvent], Awaitable[None]]


def _preview(title: str) -> str:
    return f"{title[:TITLE_PREVIEW_LENGTH]}..."


class ArticleProcessor:
    """Walks a store's blogs and articles, reporting and fixing structural issues."""

    def __init__(
        self,
        shopify_client: ShopifyClient,
        rate_limiter: RateLimiter | None = None,
        page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self._shopify = shopify_client
        self._rate_limiter = rate_limiter or RateLimiter()
        self._page_size = page_size

    async def stream(
        self,
        mode: ProcessingMode = ProcessingMode.DRY_RUN,
        limit: int = 10,
    ) -> AsyncIterator[ProgressEvent]:
        """Process up to `limit` articles, yielding progress as it happens.

        Blogs are visited in API order and their articles one at a time. A
        blog whose articles cannot be fetched is skipped, and a failed update
        is reported without stopping the run. Any other error ends the stream
        with a single error event and no results.

        Args:
            mode: FIX rewrites flagged articles, DRY_RUN only reports them.
            limit: Maximum number of articles to process across all blogs.

        Yields:
            LogEvent for each step, then one ResultsEvent on success.
        """
        logger.info("Starting processing run", mode=mode.value, limit=limit)

        try:
            results = ProcessingResults()

            yield LogEvent("Fetching blogs...")
            try:
                blogs = await self._shopify.get_blogs()
            except ShopifyError as e:
                raise ShopifyError(f"Failed to fetch blogs: {e.reason}", e.status_code) from e
            yield LogEvent(f"Found {len(blogs)} blog(s)", EventType.SUCCESS)

            for blog in blogs:
                if results.total_processed >= limit:
                    break
                async for event in self._process_blog(blog, mode, limit, results):
                    yield event

            logger.info(
                "Processing run complete",
                processed=results.total_processed,
                issues_found=results.issues_found,
                fixed=results.fixed,
            )
            yield LogEvent(
                f"Process complete! Processed {results.total_processed} articles, "
                f"fixed {results.fixed} issues.",
                EventType.SUCCESS,
            )
            yield ResultsEvent(results)
        except Exception as e:
            logger.error("Processing run failed", error=str(e))
            yield LogEvent(f"Error: {e}", EventType.ERROR)

    async def run(
        self,
        sink: EventSink,
        mode: ProcessingMode = ProcessingMode.DRY_RUN,
        limit: int = 10,
    ) -> ProcessingResults | None:
        """Process articles, handing every event to `sink`.

        Returns:
            The run's results, or None if the run failed.
        """
        results = None
        async for event in self.stream(mode=mode, limit=limit):
            await sink(event)
            if isinstance(event, ResultsEvent):
                results = event.results
        return results

    async def _process_blog(
        self,
        blog: ShopifyBlog,
        mode: ProcessingMode,
        limit: int,
        results: ProcessingResults,
    ) -> AsyncIterator[ProgressEvent]:
        yield LogEvent(f"Processing blog: {blog.title}")

        try:
            articles = await self._shopify.get_articles(blog.id, limit=self._page_size)
        except ShopifyError as e:
            logger.warning("Skipping blog", blog_id=blog.id, reason=e.reason)
            yield LogEvent(f"Failed to fetch articles for {blog.title}", EventType.ERROR)
            return

        articles = articles[: limit - results.total_processed]
        yield LogEvent(f"Found {len(articles)} articles to process")

        for article in articles:
            async for event in self._process_article(blog, article, mode, results):
                yield event

    async def _process_article(
        self,
        blog: ShopifyBlog,
        article: ShopifyArticle,
        mode: ProcessingMode,
        results: ProcessingResults,
    ) -> AsyncIterator[ProgressEvent]:
        issues = analyze_article(article.content)
        status = ArticleStatus.NO_ISSUES

        if issues.has_issues:
            results.issues_found += 1
            logger.info("Issues found", blog_id=blog.id, article_id=article.id)
            yield LogEvent(f"Issues found in: {_preview(article.title)}", EventType.WARNING)

            if mode is ProcessingMode.FIX:
                if await self._fix_article(blog, article):
                    results.fixed += 1
                    status = ArticleStatus.FIXED
                    yield LogEvent(f"Fixed: {_preview(article.title)}", EventType.SUCCESS)
                else:
                    status = ArticleStatus.FAILED
                    yield LogEvent(f"Failed to fix: {_preview(article.title)}", EventType.ERROR)
            else:
                results.fixed += 1
                status = ArticleStatus.WOULD_FIX
                yield LogEvent(f"Would fix: {_preview(article.title)}")

        results.articles.append(
            ArticleRecord(blog=blog.title, title=article.title, issues=issues, status=status)
        )
        results.total_processed += 1

    async def _fix_article(self, blog: ShopifyBlog, article: ShopifyArticle) -> bool:
        """Rewrite an article and push it back. Returns whether Shopify accepted it."""
        fixed_content = fix_article_content(article.content)

        try:
            async with self._rate_limiter:
                await self._shopify.update_article_content(blog.id, article.id, fixed_content)
        except ShopifyError as e:
            logger.error(
                "Failed to update article",
                blog_id=blog.id,
                article_id=article.id,
                reason=e.reason,
            )
            return False
        return True
