import aiohttp
import asyncio
import json
import re
import time
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urlencode
from aiohttp import ClientError
from config import APIConfig
from adminsite.auth import TokenStore
from adminsite.fallbacks import DEFAULT_FALLBACKS, FallbackTable, get_fallback_data
from adminsite.logger import logger, APIEvent, CacheEvent, ErrorEvent

_ABSOLUTE_URL = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.-]*://')


class APIError(Exception):
    """Any failed request: transport error or non-2xx status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


@dataclass
class CacheEntry:
    data: Any
    timestamp: float  # seconds, time.time()


class AdminAPIClient:
    """HTTP client for the admin site backend.

    GET responses can be cached per call, identical in-flight requests share a
    single network operation, failed attempts are retried with exponential
    backoff and a few public endpoints fall back to static data once every
    attempt has failed.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        fallbacks: Optional[FallbackTable] = None,
        token_store: Optional[TokenStore] = None,
        max_attempts: Optional[int] = None,
    ):
        self.base_url = APIConfig.BASE_URL if base_url is None else base_url
        self.endpoints = APIConfig.ENDPOINTS
        self.fallbacks = DEFAULT_FALLBACKS if fallbacks is None else fallbacks
        self.token_store = TokenStore() if token_store is None else token_store
        self.max_attempts = max_attempts or APIConfig.MAX_ATTEMPTS
        self.retry_base = APIConfig.RETRY_BASE_SECONDS
        self.timeout = APIConfig.REQUEST_TIMEOUT_SECONDS
        self.default_headers = {
            'Content-Type': 'application/json',
            'X-Requested-With': 'XMLHttpRequest',
        }
        self._cache: Dict[str, CacheEntry] = {}
        self._pending: Dict[str, asyncio.Task] = {}
        # Replaced in tests to observe backoff without waiting
        self._sleep = asyncio.sleep

        # Delay creating the aiohttp session until ``init`` is called. This
        # avoids requiring a running event loop when constructing the client.
        self.session: Optional[aiohttp.ClientSession] = None

    async def init(self) -> None:
        """Create the underlying :class:`aiohttp.ClientSession` if needed."""
        if self.session is None:
            # The session cookie jar carries same-origin credentials
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )

    async def close(self) -> None:
        if self.session is not None and not self.session.closed:
            await self.session.close()

    async def __aenter__(self) -> "AdminAPIClient":
        await self.init()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    ### Cache

    @staticmethod
    def generate_cache_key(endpoint: str, params: Optional[Dict[str, Any]] = None) -> str:
        """Build the cache key for an endpoint and its query parameters.

        Parameter keys are sorted, so two mappings with the same items map to
        the same key whatever their insertion order.
        """
        key_data = json.dumps(params, sort_keys=True, default=str) if params else ""
        return f"{endpoint}:{key_data}"

    def is_cache_valid(self, cache_key: str, ttl: float) -> bool:
        """Whether an entry exists for ``cache_key`` and is younger than ``ttl`` milliseconds."""
        cached = self._cache.get(cache_key)
        if cached is None:
            return False
        return (time.time() - cached.timestamp) * 1000 < ttl

    def get_cached_data(self, cache_key: str) -> Any:
        cached = self._cache.get(cache_key)
        return cached.data if cached else None

    def set_cached_data(self, cache_key: str, data: Any) -> None:
        self._cache[cache_key] = CacheEntry(data=data, timestamp=time.time())

    def clear_cache(self) -> None:
        """Drop every cached response and forget in-flight requests."""
        removed = len(self._cache)
        self._cache.clear()
        self._pending.clear()
        logger.log(CacheEvent(action="clear_all", removed=removed), domain="api")

    def clear_cache_for(self, endpoint: str) -> int:
        """Remove cached entries whose key starts with ``endpoint``.

        Returns the number of entries removed.
        """
        keys_to_delete = [key for key in self._cache if key.startswith(endpoint)]
        for key in keys_to_delete:
            del self._cache[key]
        logger.log(CacheEvent(action="clear_prefix", prefix=endpoint, removed=len(keys_to_delete)), domain="api")
        return len(keys_to_delete)

    ### Requests

    def _build_url(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> str:
        url = endpoint if _ABSOLUTE_URL.match(endpoint) else f"{self.base_url}{endpoint}"
        if params:
            query = urlencode({k: self._param_value(v) for k, v in params.items()})
            url += ('&' if '?' in url else '?') + query
        return url

    @staticmethod
    def _param_value(value: Any) -> str:
        if isinstance(value, bool):
            return 'true' if value else 'false'
        return str(value)

    async def _parse_response(self, response) -> Any:
        content_type = response.headers.get('Content-Type', '') or ''
        if 'json' in content_type.lower():
            return await response.json(content_type=None)
        return await response.text()

    async def request(
            self,
            endpoint: str,
            method: str = 'GET',
            data: Any = None,
            params: Optional[Dict[str, Any]] = None,
            use_cache: bool = False,
            cache_ttl: Optional[float] = None,
            headers: Optional[Dict[str, str]] = None,
            max_attempts: Optional[int] = None,
    ) -> Any:
        """Perform a request against the backend.

        Args:
            endpoint: Path relative to ``base_url`` or an absolute URL
            method: HTTP method
            data: JSON body for non-GET requests
            params: Query parameters, only sent with GET
            use_cache: Serve and store GET responses from the in-memory cache
            cache_ttl: Cache lifetime in milliseconds (default one minute)
            headers: Extra headers, these win over the defaults
            max_attempts: Attempts before giving up (default 3)

        Returns:
            Parsed JSON, or the body text for non-JSON responses. Known public
            endpoints return static fallback data once every attempt fails.

        Raises:
            APIError: every attempt failed and no fallback exists
        """
        method = method.upper()
        if cache_ttl is None:
            cache_ttl = APIConfig.CACHE_TTL['DEFAULT']
        cache_key = self.generate_cache_key(endpoint, params)

        if use_cache and method == 'GET' and self.is_cache_valid(cache_key, cache_ttl):
            return deepcopy(self.get_cached_data(cache_key))

        pending = self._pending.get(cache_key)
        if pending is not None:
            return await asyncio.shield(pending)

        task = asyncio.ensure_future(self._send(
            endpoint,
            cache_key,
            method=method,
            data=data,
            params=params,
            use_cache=use_cache,
            headers=headers,
            max_attempts=max(1, max_attempts or self.max_attempts),
        ))
        self._pending[cache_key] = task
        return await asyncio.shield(task)

    async def _send(
            self,
            endpoint: str,
            cache_key: str,
            method: str,
            data: Any,
            params: Optional[Dict[str, Any]],
            use_cache: bool,
            headers: Optional[Dict[str, str]],
            max_attempts: int,
    ) -> Any:
        try:
            result = await self._fetch_with_retry(endpoint, method, data, params, headers, max_attempts)
        except APIError as e:
            logger.log(ErrorEvent(
                error_type=type(e).__name__,
                message=str(e),
                source=self.__class__.__name__,
                context=f"API request failed for {endpoint}",
            ), domain="api")
            fallback = get_fallback_data(endpoint, self.fallbacks)
            if fallback is not None:
                logger.log(APIEvent("fallback_used", f"Using fallback data for {endpoint}"), domain="api")
                return fallback
            raise
        else:
            if use_cache and method == 'GET':
                self.set_cached_data(cache_key, deepcopy(result))
            return result
        finally:
            # clear_cache() may have dropped or replaced this entry meanwhile
            if self._pending.get(cache_key) is asyncio.current_task():
                del self._pending[cache_key]

    async def _fetch_with_retry(
            self,
            endpoint: str,
            method: str,
            data: Any,
            params: Optional[Dict[str, Any]],
            headers: Optional[Dict[str, str]],
            max_attempts: int,
    ) -> Any:
        await self.init()
        url = self._build_url(endpoint, params if method == 'GET' else None)
        request_headers = {**self.default_headers, **(headers or {})}
        body = json.dumps(data) if data is not None and method != 'GET' else None

        last_error: Optional[APIError] = None
        for attempt in range(1, max_attempts + 1):
            try:
                async with self.session.request(method, url, headers=request_headers, data=body) as response:
                    if not 200 <= response.status < 300:
                        text = await response.text()
                        raise APIError(f"HTTP {response.status}: {text or response.reason}", status=response.status)
                    return await self._parse_response(response)
            except APIError as e:
                last_error = e
            except (ClientError, asyncio.TimeoutError, ValueError) as e:
                last_error = APIError(f"Request to {url} failed: {type(e).__name__}: {e}")

            logger.log(APIEvent("attempt_failed", f"{method} {url} attempt {attempt}/{max_attempts}: {last_error}"), domain="api")
            if attempt < max_attempts:
                await self._sleep(self.retry_base ** attempt)

        raise last_error

    ### Auth

    def get_auth_token(self) -> Optional[str]:
        return self.token_store.get_token()

    def set_auth_token(self, token: str, remember: bool = False) -> None:
        self.token_store.set_token(token, remember=remember)

    def clear_auth_token(self) -> None:
        self.token_store.clear_token()

    def is_authenticated(self) -> bool:
        return self.token_store.is_authenticated()

    def auth_headers(self) -> Dict[str, str]:
        """Authorization header for admin endpoints. Empty when no token is stored."""
        token = self.get_auth_token()
        if not token:
            return {}
        return {'Authorization': f'Bearer {token}'}

    ### Public reads

    async def get_stats(self) -> Dict:
        return await self.request(
            self.endpoints['STATS_PUBLIC'],
            use_cache=True,
            cache_ttl=APIConfig.CACHE_TTL['STATS'],
        )

    async def get_events(self, limit: int = 3) -> list:
        """Upcoming public events."""
        return await self.request(
            self.endpoints['EVENTS_PUBLIC'],
            params={'limit': limit, 'status': 'upcoming'},
            use_cache=True,
            cache_ttl=APIConfig.CACHE_TTL['EVENTS'],
        )

    async def get_blog_posts(self, limit: int = 3) -> list:
        """Published blog posts."""
        return await self.request(
            self.endpoints['BLOG_PUBLIC'],
            params={'limit': limit, 'published': True},
            use_cache=True,
            cache_ttl=APIConfig.CACHE_TTL['BLOG'],
        )

    async def get_partners(self) -> list:
        return await self.request(
            self.endpoints['PARTNERS'],
            use_cache=True,
            cache_ttl=APIConfig.CACHE_TTL['PARTNERS'],
        )

    ### POST

    async def subscribe_newsletter(self, email: str) -> Any:
        return await self.request(self.endpoints['NEWSLETTER'], method='POST', data={'email': email})

    async def submit_contact(self, form_data: Dict[str, Any]) -> Any:
        return await self.request(self.endpoints['CONTACT'], method='POST', data=form_data)

    ### Admin (bearer token required)

    async def create_event(self, event_data: Dict[str, Any]) -> Any:
        result = await self.request(
            self.endpoints['EVENTS_ADMIN'],
            method='POST',
            data=event_data,
            headers=self.auth_headers(),
        )
        self.clear_cache_for(self.endpoints['EVENTS_PUBLIC'])
        return result

    async def update_event(self, event_id: str, event_data: Dict[str, Any]) -> Any:
        result = await self.request(
            f"{self.endpoints['EVENTS_ADMIN']}/{event_id}",
            method='PUT',
            data=event_data,
            headers=self.auth_headers(),
        )
        self.clear_cache_for(self.endpoints['EVENTS_PUBLIC'])
        return result

    async def delete_event(self, event_id: str) -> Any:
        result = await self.request(
            f"{self.endpoints['EVENTS_ADMIN']}/{event_id}",
            method='DELETE',
            headers=self.auth_headers(),
        )
        self.clear_cache_for(self.endpoints['EVENTS_PUBLIC'])
        return result
