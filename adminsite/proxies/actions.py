"""Requests accepted by the source-hosting relay.

The JSON body names one of a closed set of actions; each variant validates its
own required fields.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class GetFilesAction:
    """List every file in the repository tree."""

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "GetFilesAction":
        return cls()


@dataclass(frozen=True)
class GetFileAction:
    """Read one file's contents."""
    path: str

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "GetFileAction":
        return cls(path=_require_path(payload))


@dataclass(frozen=True)
class SaveFileAction:
    """Write one file. ``sha`` is the blob being replaced, None for a new file."""
    path: str
    content: str
    sha: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SaveFileAction":
        path = _require_path(payload)
        content = payload.get('content')
        if not isinstance(content, str):
            raise ValueError("content is required for saveFile")
        sha = payload.get('sha')
        return cls(path=path, content=content, sha=sha or None)


SourceAction = Union[GetFilesAction, GetFileAction, SaveFileAction]

ACTIONS = {
    'getFiles': GetFilesAction,
    'getFile': GetFileAction,
    'saveFile': SaveFileAction,
}


def _require_path(payload: Dict[str, Any]) -> str:
    path = payload.get('path')
    if not isinstance(path, str) or not path.strip():
        raise ValueError(f"path is required for {payload.get('action')}")
    return path.strip().lstrip('/')


def parse_action(payload: Any) -> SourceAction:
    """Turn a decoded request body into an action.

    Raises:
        ValueError: unknown action or a missing required field
    """
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    action_cls = ACTIONS.get(payload.get('action'))
    if action_cls is None:
        raise ValueError("Invalid action")
    return action_cls.from_payload(payload)
