"""Quick Action 调度追踪器。"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List

from session_core.infrastructure.logging.logger import logger


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class TraceEvent:
    event: str
    action: str
    document_id: str
    timestamp: str
    fields: Dict[str, Any] = field(default_factory=dict)


class DispatchTracer:
    """记录每次状态迁移，并同步写入日志。

    事件只用于观测与测试断言，Dispatcher 的正确性不依赖它。
    内存中最多保留 max_events 条，超出后丢弃最早的记录。
    """

    def __init__(self, max_events: int = 500):
        self._events: Deque[TraceEvent] = deque(maxlen=max_events)

    @property
    def events(self) -> List[TraceEvent]:
        return list(self._events)

    def names(self) -> List[str]:
        return [e.event for e in self._events]

    def events_for(self, action: str, document_id: str) -> List[TraceEvent]:
        return [e for e in self._events if e.action == action and e.document_id == document_id]

    def record(self, event: str, *, action: str, document_id: str, **fields: Any) -> TraceEvent:
        entry = TraceEvent(
            event=event,
            action=action,
            document_id=document_id,
            timestamp=_utcnow(),
            fields=_trim_fields(fields),
        )
        self._events.append(entry)
        logger.info(
            f"quick_action.{event}",
            extra={"extra": {"action": action, "document_id": document_id, **entry.fields}},
        )
        return entry

    def clear(self) -> None:
        self._events.clear()


def _trim_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    trimmed: Dict[str, Any] = {}
    for key, value in fields.items():
        if isinstance(value, str) and len(value) > 200:
            trimmed[key] = value[:200] + "..."
        else:
            trimmed[key] = value
    return trimmed
