from .api_client import AdminAPIClient, APIError, CacheEntry
from .auth import TokenStore, FileStorage, MemoryStorage
from .fallbacks import Endpoint, DEFAULT_FALLBACKS, get_fallback_data

__all__ = [
    'AdminAPIClient',
    'APIError',
    'CacheEntry',
    'TokenStore',
    'FileStorage',
    'MemoryStorage',
    'Endpoint',
    'DEFAULT_FALLBACKS',
    'get_fallback_data',
]
