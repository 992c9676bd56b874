"""持久化键值存储的容错包装。

存储不可用（目录只读、磁盘满、文件损坏等）时，
丢失会话连续性是可以接受的：调用方最多重新开一个对话。
因此这里的所有操作都不会抛出异常，失败时只记录一条 warning。
"""

from typing import Optional

from session_core.domain.conversation import KeyValueBackend
from session_core.infrastructure.logging.logger import logger


class PersistentKeyStore:
    def __init__(self, backend: KeyValueBackend):
        self._backend = backend

    def get(self, key: str) -> Optional[str]:
        try:
            return self._backend.get(key)
        except Exception as e:
            self._log_failure("get", key, e)
            return None

    def set(self, key: str, value: str) -> None:
        try:
            self._backend.set(key, value)
        except Exception as e:
            self._log_failure("set", key, e)

    def remove(self, key: str) -> None:
        try:
            self._backend.remove(key)
        except Exception as e:
            self._log_failure("remove", key, e)

    @staticmethod
    def _log_failure(op: str, key: str, error: Exception) -> None:
        logger.warning(
            f"Key store {op} failed: {error}",
            extra={"extra": {"op": op, "key": key, "error": str(error), "error_type": type(error).__name__}},
        )
