"""Static substitute payloads for public read endpoints.

Used by :class:`adminsite.api_client.AdminAPIClient` once every retry for one
of these endpoints has failed, so the public pages still render something.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from adminsite.models import BlogPost, PublicEvent, PublicStats
from config import APIConfig, AppConfig

FallbackPayload = Union[PublicStats, List[PublicEvent], List[BlogPost]]


class Endpoint(str, Enum):
    """Read-only endpoints that have canned fallback data."""
    STATS_PUBLIC = APIConfig.ENDPOINTS['STATS_PUBLIC']
    EVENTS_PUBLIC = APIConfig.ENDPOINTS['EVENTS_PUBLIC']
    BLOG_PUBLIC = APIConfig.ENDPOINTS['BLOG_PUBLIC']


def _iso(dt: datetime) -> str:
    return dt.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def fallback_stats() -> PublicStats:
    return PublicStats(members=1500, events=50, chapters=24, registered=100)


def fallback_events() -> List[PublicEvent]:
    now = datetime.now(timezone.utc)
    return [
        PublicEvent(
            id='fallback-1',
            title='Clinical Skills Workshop',
            description='Hands-on training on advanced clinical procedures',
            date=_iso(now + timedelta(days=7)),
            location='KNH Training Center, Nairobi',
            category='workshop',
            status='upcoming',
            color='from-blue-600 to-blue-400',
        ),
        PublicEvent(
            id='fallback-2',
            title='Annual Nursing Conference',
            description='Networking with industry leaders',
            date=_iso(now + timedelta(days=14)),
            location='Virtual & On-site',
            category='conference',
            status='upcoming',
            color='from-teal-600 to-teal-400',
        ),
    ]


def fallback_blog_posts() -> List[BlogPost]:
    return [
        BlogPost(
            id='fallback-1',
            title='Balancing Studies and Clinical Rotations',
            excerpt='Practical tips for nursing students',
            content='Full article content here...',
            author='Jane Mwangi',
            category='student-life',
            created_at=_iso(datetime.now(timezone.utc)),
            image=AppConfig.DEFAULT_BLOG_IMAGE,
        ),
    ]


FallbackTable = Dict[Endpoint, Callable[[], FallbackPayload]]

DEFAULT_FALLBACKS: FallbackTable = {
    Endpoint.STATS_PUBLIC: fallback_stats,
    Endpoint.EVENTS_PUBLIC: fallback_events,
    Endpoint.BLOG_PUBLIC: fallback_blog_posts,
}


def _render(payload: FallbackPayload) -> Any:
    if isinstance(payload, list):
        return [item.to_dict() for item in payload]
    return payload.to_dict()


def get_fallback_data(endpoint: str, table: Optional[FallbackTable] = None) -> Optional[Any]:
    """Return the JSON-shaped fallback for ``endpoint``, or None if there is none."""
    table = DEFAULT_FALLBACKS if table is None else table
    try:
        key = Endpoint(endpoint)
    except ValueError:
        return None
    builder = table.get(key)
    if builder is None:
        return None
    return _render(builder())
