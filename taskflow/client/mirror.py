import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from ..config import MIRROR_DIR
from ..schemas.task import Task
from ..schemas.user import User

logger = logging.getLogger(__name__)

USER_KEY = "taskflow_user"
TASKS_KEY = "taskflow_tasks"


class LocalMirror:
    """On-device key-value snapshot of the identity and the last task list.

    Each key is one JSON file under ``root``. Entries are only ever written
    whole; a corrupt or unreadable entry reads as absent.
    """

    def __init__(self, root: Union[str, Path] = MIRROR_DIR):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable mirror entry %s: %s", key, exc)
            return None

    def set(self, key: str, value: Any) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=str(self.root), prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(value, fh)
            os.replace(tmp, self._path(key))
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp)
            raise

    def remove(self, key: str) -> None:
        with contextlib.suppress(FileNotFoundError):
            self._path(key).unlink()

    def remove_user(self) -> None:
        self.remove(USER_KEY)

    def clear(self) -> None:
        for key in (USER_KEY, TASKS_KEY):
            self.remove(key)

    # ---- typed entries ----

    def load_user(self) -> Optional[User]:
        raw = self.get(USER_KEY)
        if raw is None:
            return None
        try:
            return User.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Ignoring malformed stored user: %s", exc)
            return None

    def save_user(self, user: User) -> None:
        self.set(USER_KEY, user.model_dump(mode="json", by_alias=True))

    def load_tasks(self) -> List[Task]:
        raw = self.get(TASKS_KEY)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Ignoring stored task list of type %s", type(raw).__name__)
            return []
        try:
            return [Task.model_validate(item) for item in raw]
        except ValidationError as exc:
            logger.warning("Ignoring malformed stored task list: %s", exc)
            return []

    def save_tasks(self, tasks: List[Task]) -> None:
        self.set(TASKS_KEY, [t.model_dump(mode="json", by_alias=True) for t in tasks])

