"""Endpoint and cache configuration for the admin site API client."""

import os


class APIConfig:
    # Prefixed to every relative endpoint. Absolute URLs are used as-is.
    BASE_URL = os.environ.get("ADMINSITE_BASE_URL", "")

    ENDPOINTS = {
        'STATS_PUBLIC': '/api/stats/public',
        'EVENTS_PUBLIC': '/api/events/public',
        'BLOG_PUBLIC': '/api/blog/public',
        'PARTNERS': '/api/partners',
        'NEWSLETTER': '/api/newsletter/subscribe',
        'CONTACT': '/api/contact',
        'EVENTS_ADMIN': '/api/admin/events',
    }

    # Cache lifetimes in milliseconds
    CACHE_TTL = {
        'DEFAULT': 60 * 1000,
        'STATS': 5 * 60 * 1000,
        'EVENTS': 10 * 60 * 1000,
        'BLOG': 15 * 60 * 1000,
        'PARTNERS': 60 * 60 * 1000,
    }

    MAX_ATTEMPTS = 3
    # Backoff before retry n is RETRY_BASE_SECONDS ** n
    RETRY_BASE_SECONDS = 2
    REQUEST_TIMEOUT_SECONDS = 30
