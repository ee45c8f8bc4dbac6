from .api_config import APIConfig
from .app_config import AppConfig, AuthConfig, SupabaseConfig
from .log_config import LogConfig
from .proxy_config import ProxyConfig

__all__ = ["APIConfig", "AppConfig", "AuthConfig", "SupabaseConfig", "LogConfig", "ProxyConfig"]
