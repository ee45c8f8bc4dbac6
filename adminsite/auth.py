"""Bearer token storage for the admin client.

A token lives in one of two scopes: durable (survives a restart, used for
"remember me") or session (gone with the process). Either copy being present
counts as authenticated; no signature or expiry check happens client-side.
"""

import json
import threading
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from config import AuthConfig


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class MemoryStorage:
    """Session-scoped storage. Contents are lost with the instance."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage:
    """Durable storage backed by a small JSON file.

    The file is only touched on access, so constructing one is free.
    """

    _lock = threading.Lock()

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, 'r') as f:
            content = f.read()
        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            # Unreadable storage counts as empty; the next write replaces it
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(data, f)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)


class TokenStore:
    def __init__(
        self,
        durable: Optional[KeyValueStorage] = None,
        session: Optional[KeyValueStorage] = None,
        key: str = AuthConfig.TOKEN_KEY,
    ):
        self.durable = durable if durable is not None else FileStorage(AuthConfig.DURABLE_STORAGE_PATH)
        self.session = session if session is not None else MemoryStorage()
        self.key = key

    def get_token(self) -> Optional[str]:
        return self.durable.get(self.key) or self.session.get(self.key)

    def set_token(self, token: str, remember: bool = False) -> None:
        """Store ``token`` durably if ``remember``, otherwise for this session only."""
        if remember:
            self.durable.set(self.key, token)
        else:
            self.session.set(self.key, token)

    def clear_token(self) -> None:
        self.durable.remove(self.key)
        self.session.remove(self.key)

    def is_authenticated(self) -> bool:
        return bool(self.get_token())
