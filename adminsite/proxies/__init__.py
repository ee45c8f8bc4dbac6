from .actions import GetFileAction, GetFilesAction, SaveFileAction, parse_action
from .github_proxy import ProxyConfigError

__all__ = [
    "GetFileAction",
    "GetFilesAction",
    "SaveFileAction",
    "parse_action",
    "ProxyConfigError",
]
