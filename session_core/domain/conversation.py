from dataclasses import dataclass
from typing import Optional, Protocol


CONVERSATION_KEY_PREFIX = "conversation_"


def conversation_key(client_id: str) -> str:
    return f"{CONVERSATION_KEY_PREFIX}{client_id}"


@dataclass(frozen=True)
class ConversationSession:
    client_id: str
    conversation_id: str


class KeyValueBackend(Protocol):
    """持久化键值存储后端。

    实现者在存储不可用时可以抛出任意异常，
    由 PersistentKeyStore 统一吸收并记录日志。
    """

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...
