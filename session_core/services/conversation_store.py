"""客户 → 会话 ID 的持久化映射。

同一客户在页面刷新或进程重启后继续使用上一次的会话上下文。
键格式为 ``conversation_{client_id}``，值为会话 ID 原文，不带版本号。
所有操作都是尽力而为：底层异常被吞掉并记录日志，调用方拿到的
最坏结果是 ``None``，即“开启一个新会话”。
"""

from typing import Optional

from session_core.domain.conversation import ConversationSession, conversation_key
from session_core.infrastructure.logging.logger import logger
from session_core.infrastructure.storage.key_store import PersistentKeyStore


class ConversationStore:
    def __init__(self, key_store: PersistentKeyStore):
        self._store = key_store

    def save(self, client_id: str, conversation_id: str) -> None:
        """保存（覆盖）客户当前的会话 ID，后写入者生效。"""

        if not client_id or not conversation_id:
            return
        try:
            self._store.set(conversation_key(client_id), conversation_id)
            logger.info(
                "Saved conversation id",
                extra={"extra": {"client_id": client_id, "conversation_id": conversation_id}},
            )
        except Exception as e:
            self._log_failure("save", client_id, e)

    def load(self, client_id: str) -> Optional[str]:
        """读取客户的会话 ID；不存在时返回 None。"""

        if not client_id:
            return None
        try:
            conversation_id = self._store.get(conversation_key(client_id))
        except Exception as e:
            self._log_failure("load", client_id, e)
            return None
        if not conversation_id:
            return None
        logger.info(
            "Loaded conversation id",
            extra={"extra": {"client_id": client_id, "conversation_id": conversation_id}},
        )
        return conversation_id

    def clear(self, client_id: str) -> None:
        """删除客户的会话 ID，重复调用无副作用。"""

        if not client_id:
            return
        try:
            self._store.remove(conversation_key(client_id))
            logger.info("Cleared conversation id", extra={"extra": {"client_id": client_id}})
        except Exception as e:
            self._log_failure("clear", client_id, e)

    def session(self, client_id: str) -> Optional[ConversationSession]:
        conversation_id = self.load(client_id)
        if conversation_id is None:
            return None
        return ConversationSession(client_id=client_id, conversation_id=conversation_id)

    @staticmethod
    def _log_failure(op: str, client_id: str, error: Exception) -> None:
        logger.warning(
            f"Conversation {op} failed: {error}",
            extra={"extra": {"client_id": client_id, "error": str(error)}},
        )
