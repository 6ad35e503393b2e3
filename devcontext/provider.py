"""Dev.to Content Provider.

Fetches articles, user profiles and comments over HTTP and validates them
into model records. Retries on rate limiting and caches responses; none of
that leaks into the analyzers.
"""

import logging
import time
from typing import Callable, Dict, List

import requests

from .comment_tree import CommentTreeBuilder, flatten_records
from .errors import ProviderError
from .models import Article, Comment, User

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://dev.to/api'


class DevToClient:
    """Client for the public Dev.to API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30,
        cache_ttl: float = 300,
        default_retry_after: float = 30,
        per_page: int = 30,
        tree_builder: CommentTreeBuilder = None,
        session: requests.Session = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ):
        """Initialize the client.

        Args:
            api_key: Dev.to API key, sent as the ``api-key`` header
            base_url: API root
            timeout: Per-request timeout in seconds
            cache_ttl: Seconds a cached response stays valid
            default_retry_after: Wait used when a 429 has no Retry-After header
            per_page: Page size for list endpoints
            tree_builder: Builder used to assemble comment threads
            session: Optional requests session (for connection reuse/testing)
            clock: Monotonic time source for the cache
            sleep: Sleep function used while rate limited
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.cache_ttl = cache_ttl
        self.default_retry_after = default_retry_after
        self.per_page = per_page
        self.tree_builder = tree_builder or CommentTreeBuilder()
        self.session = session or requests.Session()
        self.session.headers.update({'api-key': api_key})
        self._clock = clock
        self._sleep = sleep
        self._cache = {}

    @classmethod
    def from_config(cls, api_key: str, config: Dict = None, **kwargs) -> 'DevToClient':
        """Create a client from the ``provider`` config section."""
        config = config or {}
        options = {
            key: config[key]
            for key in ('base_url', 'timeout', 'cache_ttl', 'default_retry_after', 'per_page')
            if key in config
        }
        options.update(kwargs)
        return cls(api_key, **options)

    def _send(self, url: str, params: Dict) -> requests.Response:
        try:
            return self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise ProviderError('Network Error: Unable to reach Dev.to API') from e

    def _retry_after(self, response: requests.Response) -> float:
        value = response.headers.get('retry-after')
        try:
            return float(value) if value is not None else self.default_retry_after
        except ValueError:
            return self.default_retry_after

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return 'Unknown error'
        if isinstance(payload, dict):
            return payload.get('error') or payload.get('message') or 'Unknown error'
        return 'Unknown error'

    def _get(self, path: str, params: Dict = None):
        """GET a JSON resource with caching and one retry on HTTP 429.

        Args:
            path: Path below the API root
            params: Query parameters

        Returns:
            Decoded JSON payload
        """
        params = params or {}
        url = f"{self.base_url}/{path.lstrip('/')}"
        cache_key = (url, tuple(sorted(params.items())))

        cached = self._cache.get(cache_key)
        if cached and self._clock() - cached[0] < self.cache_ttl:
            logger.debug(f"Cache hit for {url}")
            return cached[1]

        response = self._send(url, params)
        if response.status_code == 429:
            delay = self._retry_after(response)
            logger.warning(f"Rate limited by Dev.to, retrying in {delay:.0f}s")
            self._sleep(delay)
            response = self._send(url, params)

        if not response.ok:
            message = self._error_message(response)
            logger.error(f"Dev.to API returned {response.status_code} for {url}: {message}")
            raise ProviderError(
                f"Dev.to API Error: {response.status_code} - {message}",
                status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(f"Dev.to API returned invalid JSON for {url}") from e

        self._cache[cache_key] = (self._clock(), data)
        return data

    def clear_cache(self):
        """Drop all cached responses."""
        self._cache.clear()

    @staticmethod
    def article_id_from_url(url: str) -> str:
        """Take the last non-empty path segment of an article URL."""
        segments = [part for part in url.split('?')[0].split('/') if part]
        if not segments:
            raise ProviderError(f"Cannot extract an article id from {url!r}")
        return segments[-1]

    def get_article(self, article_id) -> Article:
        """Fetch one article by id or path."""
        return Article.from_dict(self._get(f"articles/{article_id}"))

    def get_article_by_url(self, url: str) -> Article:
        """Fetch the article a URL points to."""
        return self.get_article(self.article_id_from_url(url))

    def get_article_comments(
        self,
        article_id,
        tree_builder: CommentTreeBuilder = None
    ) -> List[Comment]:
        """Fetch an article's comments as a forest of threads.

        Args:
            article_id: Article id
            tree_builder: Builder to use instead of the client's own, so a
                caller's duplicate policy applies

        Returns:
            Root comments with replies attached
        """
        payload = self._get('comments', {'a_id': article_id})
        comments = [Comment.from_dict(record) for record in flatten_records(payload)]
        return (tree_builder or self.tree_builder).build(comments)

    def get_user_articles(self, username: str, page: int = 1) -> List[Article]:
        """Fetch one page of a user's published articles."""
        payload = self._get('articles', {
            'username': username,
            'page': page,
            'per_page': self.per_page
        })
        return [Article.from_dict(record) for record in payload]

    def get_user_info(self, username: str) -> User:
        """Fetch a user profile."""
        return User.from_dict(self._get('users/by_username', {'url': username}))

    def get_article_tags(self, article_id) -> List[str]:
        """Fetch the tags of an article."""
        return list(self.get_article(article_id).tags)

    def search_articles(self, query: str, page: int = 1) -> List[Article]:
        """Search published articles."""
        payload = self._get('articles', {
            'q': query,
            'page': page,
            'per_page': self.per_page
        })
        return [Article.from_dict(record) for record in payload]
