"""
Proxy: GET /cors-proxy?url=<encoded target>
Forwards the request to the backend-as-a-service with the public API key
attached and returns the JSON body with permissive CORS headers.
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from adminsite.logger import logger, ErrorEvent, ProxyEvent
from adminsite.proxies.responses import error, json_response, text_response
from config import ProxyConfig


def _upstream_headers() -> Dict[str, str]:
    return {
        'apikey': ProxyConfig.RELAY_API_KEY,
        'Authorization': f'Bearer {ProxyConfig.RELAY_API_KEY}',
    }


async def _get_json(session: aiohttp.ClientSession, url: str) -> Any:
    async with session.get(url, headers=_upstream_headers()) as response:
        return await response.json(content_type=None)


async def fetch_upstream(url: str, session: Optional[aiohttp.ClientSession] = None) -> Any:
    if session is not None:
        return await _get_json(session, url)
    async with aiohttp.ClientSession() as own_session:
        return await _get_json(own_session, url)


async def handle(event: Dict[str, Any], session: Optional[aiohttp.ClientSession] = None) -> Dict[str, Any]:
    method = (event.get('httpMethod') or '').upper()
    if method != 'GET':
        return text_response('Method Not Allowed', 405)

    query_params = event.get('queryStringParameters') or {}
    url = query_params.get('url')
    if not url:
        return text_response('URL parameter is required', 400)

    try:
        data = await fetch_upstream(url, session)
    except Exception as e:
        logger.log(ErrorEvent(
            error_type=type(e).__name__,
            message=str(e),
            source="cors_proxy",
            context=f"Upstream request to {url} failed",
        ), domain="proxy")
        return error(str(e) or type(e).__name__, status_code=500)

    logger.log(ProxyEvent(proxy="cors_proxy", action="relay", status_code=200, target=url), domain="proxy")
    return json_response(data)


def handler(event, context):
    return asyncio.run(handle(event))
