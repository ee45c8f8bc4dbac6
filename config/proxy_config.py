"""
Server-side settings for the proxy handlers. Secrets only come from the environment.
"""

import os

from .app_config import SupabaseConfig


class ProxyConfig:
    # Injected by the CORS relay as both `apikey` and bearer token
    RELAY_API_KEY = SupabaseConfig.ANON_KEY

    GITHUB_TOKEN = os.environ.get("GITHUB_PERSONAL_ACCESS_TOKEN", "")
    GITHUB_API_ROOT = "https://api.github.com"
    GITHUB_OWNER = os.environ.get("GITHUB_OWNER", "kesnnur")
    GITHUB_REPO = os.environ.get("GITHUB_REPO", "kesnnur")
    GITHUB_BRANCH = os.environ.get("GITHUB_BRANCH", "main")
    COMMIT_MESSAGE_TEMPLATE = "Update {path} via KESNNUR Admin"
