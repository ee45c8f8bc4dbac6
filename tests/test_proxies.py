import asyncio
import base64
import json
import unittest

from aiohttp import ClientConnectionError

from adminsite.proxies import cors_proxy, github_proxy
from adminsite.proxies.actions import GetFileAction, GetFilesAction, SaveFileAction, parse_action
from config import ProxyConfig


class DummyResponse:
    def __init__(self, payload):
        self._payload = payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        pass

    async def json(self, content_type=None):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class DummySession:
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    def _respond(self, call):
        self.calls.append(call)
        if self.error is not None:
            raise self.error
        return DummyResponse(self.payload)

    def get(self, url, **kwargs):
        return self._respond({'method': 'GET', 'url': url, **kwargs})

    def request(self, method, url, **kwargs):
        return self._respond({'method': method, 'url': url, **kwargs})


class ProxyConfigMixin:
    def setUp(self):
        self._saved = {
            name: getattr(ProxyConfig, name)
            for name in ('RELAY_API_KEY', 'GITHUB_TOKEN', 'GITHUB_OWNER', 'GITHUB_REPO', 'GITHUB_BRANCH')
        }
        ProxyConfig.RELAY_API_KEY = 'anon-key'
        ProxyConfig.GITHUB_TOKEN = 'gh-token'
        ProxyConfig.GITHUB_OWNER = 'acme'
        ProxyConfig.GITHUB_REPO = 'site'
        ProxyConfig.GITHUB_BRANCH = 'main'

    def tearDown(self):
        for name, value in self._saved.items():
            setattr(ProxyConfig, name, value)


class TestCorsProxy(ProxyConfigMixin, unittest.TestCase):
    def test_rejects_non_get(self):
        response = asyncio.run(cors_proxy.handle({'httpMethod': 'POST'}))
        self.assertEqual(response['statusCode'], 405)
        self.assertEqual(response['body'], 'Method Not Allowed')

    def test_requires_url(self):
        response = asyncio.run(cors_proxy.handle({'httpMethod': 'GET', 'queryStringParameters': None}))
        self.assertEqual(response['statusCode'], 400)
        self.assertEqual(response['body'], 'URL parameter is required')

    def test_relays_json_with_credentials(self):
        session = DummySession(payload=[{'id': 1}])
        event = {'httpMethod': 'GET', 'queryStringParameters': {'url': 'https://db.example/rest/v1/events'}}
        response = asyncio.run(cors_proxy.handle(event, session=session))

        self.assertEqual(response['statusCode'], 200)
        self.assertEqual(json.loads(response['body']), [{'id': 1}])
        self.assertEqual(response['headers']['Access-Control-Allow-Origin'], '*')
        self.assertEqual(response['headers']['Content-Type'], 'application/json')
        sent = session.calls[0]
        self.assertEqual(sent['url'], 'https://db.example/rest/v1/events')
        self.assertEqual(sent['headers']['apikey'], 'anon-key')
        self.assertEqual(sent['headers']['Authorization'], 'Bearer anon-key')

    def test_upstream_failure_returns_500(self):
        session = DummySession(error=ClientConnectionError('unreachable'))
        event = {'httpMethod': 'GET', 'queryStringParameters': {'url': 'https://db.example/x'}}
        response = asyncio.run(cors_proxy.handle(event, session=session))
        self.assertEqual(response['statusCode'], 500)
        self.assertEqual(json.loads(response['body']), {'error': 'unreachable'})

    def test_invalid_upstream_json_returns_500(self):
        session = DummySession(payload=ValueError('Expecting value'))
        event = {'httpMethod': 'GET', 'queryStringParameters': {'url': 'https://db.example/x'}}
        response = asyncio.run(cors_proxy.handle(event, session=session))
        self.assertEqual(response['statusCode'], 500)


class TestActions(unittest.TestCase):
    def test_parses_each_variant(self):
        self.assertEqual(parse_action({'action': 'getFiles'}), GetFilesAction())
        self.assertEqual(parse_action({'action': 'getFile', 'path': '/index.html'}), GetFileAction('index.html'))
        self.assertEqual(
            parse_action({'action': 'saveFile', 'path': 'a.md', 'content': '', 'sha': 'abc'}),
            SaveFileAction('a.md', '', 'abc'),
        )

    def test_rejects_unknown_action(self):
        with self.assertRaisesRegex(ValueError, 'Invalid action'):
            parse_action({'action': 'deleteRepo'})
        with self.assertRaisesRegex(ValueError, 'Invalid action'):
            parse_action({})

    def test_rejects_missing_fields(self):
        with self.assertRaisesRegex(ValueError, 'path is required'):
            parse_action({'action': 'getFile'})
        with self.assertRaisesRegex(ValueError, 'content is required'):
            parse_action({'action': 'saveFile', 'path': 'a.md'})

    def test_rejects_non_object_body(self):
        with self.assertRaises(ValueError):
            parse_action(['getFiles'])


class TestGithubProxy(ProxyConfigMixin, unittest.TestCase):
    def post(self, body, session):
        event = {'httpMethod': 'POST', 'body': json.dumps(body)}
        return asyncio.run(github_proxy.handle(event, session=session))

    def test_preflight(self):
        response = asyncio.run(github_proxy.handle({'httpMethod': 'OPTIONS'}))
        self.assertEqual(response['statusCode'], 200)
        self.assertEqual(response['body'], 'ok')
        self.assertIn('apikey', response['headers']['Access-Control-Allow-Headers'])

    def test_get_files_lists_tree(self):
        session = DummySession(payload={'tree': []})
        response = self.post({'action': 'getFiles'}, session)
        self.assertEqual(response['statusCode'], 200)
        self.assertEqual(json.loads(response['body']), {'tree': []})
        sent = session.calls[0]
        self.assertEqual(sent['method'], 'GET')
        self.assertEqual(sent['url'], 'https://api.github.com/repos/acme/site/git/trees/main?recursive=1')
        self.assertEqual(sent['headers']['Authorization'], 'token gh-token')
        self.assertEqual(sent['headers']['Accept'], 'application/vnd.github.v3+json')
        self.assertIsNone(sent['json'])

    def test_get_file_reads_contents_on_branch(self):
        session = DummySession(payload={'sha': 'abc'})
        self.post({'action': 'getFile', 'path': 'pages/about us.html'}, session)
        self.assertEqual(
            session.calls[0]['url'],
            'https://api.github.com/repos/acme/site/contents/pages/about%20us.html?ref=main',
        )

    def test_save_file_writes_base64_content(self):
        session = DummySession(payload={'commit': {'sha': 'new'}})
        response = self.post({'action': 'saveFile', 'path': 'index.html', 'content': 'Karibu ✓', 'sha': 'old'}, session)
        self.assertEqual(response['statusCode'], 200)
        sent = session.calls[0]
        self.assertEqual(sent['method'], 'PUT')
        self.assertEqual(sent['url'], 'https://api.github.com/repos/acme/site/contents/index.html')
        self.assertEqual(sent['json']['message'], 'Update index.html via KESNNUR Admin')
        self.assertEqual(base64.b64decode(sent['json']['content']).decode('utf-8'), 'Karibu ✓')
        self.assertEqual(sent['json']['sha'], 'old')
        self.assertEqual(sent['json']['branch'], 'main')

    def test_save_new_file_omits_sha(self):
        session = DummySession(payload={})
        self.post({'action': 'saveFile', 'path': 'new.md', 'content': 'x'}, session)
        self.assertNotIn('sha', session.calls[0]['json'])

    def test_missing_token(self):
        ProxyConfig.GITHUB_TOKEN = ''
        session = DummySession(payload={})
        response = self.post({'action': 'getFiles'}, session)
        self.assertEqual(response['statusCode'], 400)
        self.assertEqual(json.loads(response['body']), {'error': 'GitHub token not configured'})
        self.assertEqual(session.calls, [])

    def test_invalid_action(self):
        response = self.post({'action': 'nope'}, DummySession(payload={}))
        self.assertEqual(response['statusCode'], 400)
        self.assertEqual(json.loads(response['body']), {'error': 'Invalid action'})
        self.assertEqual(response['headers']['Access-Control-Allow-Origin'], '*')

    def test_invalid_json_body(self):
        event = {'httpMethod': 'POST', 'body': '{not json'}
        response = asyncio.run(github_proxy.handle(event, session=DummySession(payload={})))
        self.assertEqual(response['statusCode'], 400)

    def test_upstream_failure(self):
        session = DummySession(error=ClientConnectionError('timeout'))
        response = self.post({'action': 'getFiles'}, session)
        self.assertEqual(response['statusCode'], 400)
        self.assertEqual(json.loads(response['body']), {'error': 'timeout'})

if __name__ == '__main__':
    unittest.main()
