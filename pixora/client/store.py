import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from pixora.client.state import AppState, LocalPost, LocalUser

logger = logging.getLogger(__name__)

STORAGE_KEY_USER = "pixora_user"
STORAGE_KEY_POSTS = "pixora_posts"

_posts_adapter = TypeAdapter(List[LocalPost])

class LocalStore:
    """Two JSON records in a directory, one per storage key"""

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def _read(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def _write(self, key: str, value: str) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def load(self) -> AppState:
        """Read both records; a missing or unreadable record loads as empty"""
        state = AppState()

        raw_user = self._read(STORAGE_KEY_USER)
        if raw_user:
            try:
                user = json.loads(raw_user)
                state.current_user = LocalUser.model_validate(user) if user else None
            except (ValueError, SchemaError) as e:
                logger.warning(f"Ignoring corrupt {STORAGE_KEY_USER} record: {e}")
                state.current_user = None

        raw_posts = self._read(STORAGE_KEY_POSTS)
        if raw_posts:
            try:
                state.posts = _posts_adapter.validate_json(raw_posts)
            except (ValueError, SchemaError) as e:
                logger.warning(f"Ignoring corrupt {STORAGE_KEY_POSTS} record: {e}")
                state.posts = []

        return state

    def save(self, state: AppState) -> None:
        """Write the full state back, both records"""
        user = state.current_user.model_dump(by_alias=True) if state.current_user else None
        posts = [post.model_dump(by_alias=True) for post in state.posts]
        self._write(STORAGE_KEY_USER, json.dumps(user))
        self._write(STORAGE_KEY_POSTS, json.dumps(posts))

    def clear_user(self) -> None:
        path = self._path(STORAGE_KEY_USER)
        if path.exists():
            path.unlink()
