"""
Proxy: POST /github-api  {action, path?, content?, sha?}
Reads and writes files of the site repository through the GitHub contents
API using a server-held token. OPTIONS answers the CORS pre-flight.
"""

import asyncio
import base64
import json
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import aiohttp

from adminsite.logger import logger, ErrorEvent, ProxyEvent
from adminsite.proxies.actions import (
    GetFileAction,
    GetFilesAction,
    SaveFileAction,
    SourceAction,
    parse_action,
)
from adminsite.proxies.responses import error, json_response, text_response
from config import ProxyConfig


class ProxyConfigError(RuntimeError):
    """Server-side configuration needed by a proxy is missing."""


def _repo_url(suffix: str) -> str:
    return f"{ProxyConfig.GITHUB_API_ROOT}/repos/{ProxyConfig.GITHUB_OWNER}/{ProxyConfig.GITHUB_REPO}/{suffix}"


def encode_content(content: str) -> str:
    """Base64 of the UTF-8 bytes, as the contents API expects."""
    return base64.b64encode(content.encode('utf-8')).decode('ascii')


def build_upstream_request(action: SourceAction) -> Tuple[str, str, Optional[Dict[str, Any]]]:
    """Return ``(method, url, json_body)`` for an action."""
    branch = ProxyConfig.GITHUB_BRANCH
    if isinstance(action, GetFilesAction):
        return 'GET', _repo_url(f"git/trees/{quote(branch)}?recursive=1"), None
    if isinstance(action, GetFileAction):
        return 'GET', _repo_url(f"contents/{quote(action.path)}?ref={quote(branch)}"), None
    if isinstance(action, SaveFileAction):
        body = {
            'message': ProxyConfig.COMMIT_MESSAGE_TEMPLATE.format(path=action.path),
            'content': encode_content(action.content),
            'branch': branch,
        }
        if action.sha:
            body['sha'] = action.sha
        return 'PUT', _repo_url(f"contents/{quote(action.path)}"), body
    raise TypeError(f"Unhandled action type: {type(action).__name__}")


async def _call(session: aiohttp.ClientSession, token: str, action: SourceAction) -> Any:
    method, url, body = build_upstream_request(action)
    headers = {
        'Authorization': f'token {token}',
        'Accept': 'application/vnd.github.v3+json',
    }
    if body is not None:
        headers['Content-Type'] = 'application/json'
    async with session.request(method, url, headers=headers, json=body) as response:
        return await response.json(content_type=None)


async def dispatch(action: SourceAction, token: str, session: Optional[aiohttp.ClientSession] = None) -> Any:
    if session is not None:
        return await _call(session, token, action)
    async with aiohttp.ClientSession() as own_session:
        return await _call(own_session, token, action)


def _parse_body(event: Dict[str, Any]) -> Any:
    body = event.get('body')
    if isinstance(body, (dict, list)):
        return body
    if not body:
        raise ValueError("Request body is required")
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body).decode('utf-8')
    try:
        return json.loads(body)
    except json.JSONDecodeError:
        raise ValueError("Request body must be valid JSON")


async def handle(event: Dict[str, Any], session: Optional[aiohttp.ClientSession] = None) -> Dict[str, Any]:
    method = (event.get('httpMethod') or '').upper()
    if method == 'OPTIONS':
        return text_response('ok')

    action_name = None
    try:
        payload = _parse_body(event)
        if isinstance(payload, dict):
            action_name = payload.get('action')
        token = ProxyConfig.GITHUB_TOKEN
        if not token:
            raise ProxyConfigError("GitHub token not configured")
        action = parse_action(payload)
        data = await dispatch(action, token, session)
    except Exception as e:
        logger.log(ErrorEvent(
            error_type=type(e).__name__,
            message=str(e),
            source="github_proxy",
            context=f"action={action_name}",
        ), domain="proxy")
        return error(str(e) or type(e).__name__, status_code=400)

    logger.log(ProxyEvent(proxy="github_proxy", action=str(action_name), status_code=200), domain="proxy")
    return json_response(data)


def handler(event, context):
    return asyncio.run(handle(event))
