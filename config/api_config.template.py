"""Template for deployment configuration. Copy to api_config.py and fill in your values."""


class APIConfig:
    # Origin of the admin backend, e.g. "https://admin.example.org"
    BASE_URL = "https://your-backend-here"

    ENDPOINTS = {
        'STATS_PUBLIC': '/api/stats/public',
        'EVENTS_PUBLIC': '/api/events/public',
        'BLOG_PUBLIC': '/api/blog/public',
        'PARTNERS': '/api/partners',
        'NEWSLETTER': '/api/newsletter/subscribe',
        'CONTACT': '/api/contact',
        'EVENTS_ADMIN': '/api/admin/events',
    }

    CACHE_TTL = {
        'DEFAULT': 60 * 1000,
        'STATS': 5 * 60 * 1000,
        'EVENTS': 10 * 60 * 1000,
        'BLOG': 15 * 60 * 1000,
        'PARTNERS': 60 * 60 * 1000,
    }

    MAX_ATTEMPTS = 3
    RETRY_BASE_SECONDS = 2
    REQUEST_TIMEOUT_SECONDS = 30
