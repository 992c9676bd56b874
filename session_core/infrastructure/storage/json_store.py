import contextlib
import json
import os
from pathlib import Path
from typing import Dict, Optional
from uuid import uuid4

from session_core.config.settings import settings
from session_core.domain.exceptions import StorageError


class JsonFileBackend:
    """把所有键值写进同一个 JSON 文件的持久化后端。

    写入时先写临时文件再 os.replace，避免进程中途退出留下半个文件。
    文件不存在视为空存储。
    """

    def __init__(self, root: str | Path | None = None, filename: str = "keystore.json"):
        self._root = Path(root or settings.storage_root).resolve()
        self._root.mkdir(parents=True, exist_ok=True)
        self._path = self._root / filename

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is None:
            return None
        return str(value)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key not in data:
            return
        del data[key]
        self._write_all(data)

    def _read_all(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except Exception as e:
            raise StorageError(code="STORE_READ_ERROR", message=str(e), path=str(self._path))
        if not isinstance(data, dict):
            raise StorageError(
                code="STORE_READ_ERROR",
                message=f"{self._path.name} is not a JSON object",
                path=str(self._path),
            )
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        tmp_path = self._root / f"{self._path.stem}.{uuid4().hex}.json.tmp"
        try:
            tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except Exception as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise StorageError(code="STORE_WRITE_ERROR", message=str(e), path=str(self._path))
