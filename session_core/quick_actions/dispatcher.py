"""Quick Action 调度器。

每个 (document_id, action) 组合维护一个独立的状态机：

    IDLE -> PENDING -> SUCCEEDED / FAILED

- 同一组合处于 PENDING 时再次调用 dispatch 会立即抛出 ConcurrentDispatchError，
  不会排队，也不会再发一次网络请求。
- 不同组合之间互不影响，可以同时在途。
- 后端失败会被转换成 success=False 的 QuickActionResult，不自动重试。

所有状态修改都发生在 await 之前或之后的同步代码中，
在单个事件循环内无需加锁。
"""

import asyncio
from typing import Any, Dict, List, Optional, Tuple

from session_core.domain.exceptions import BackendError, ConcurrentDispatchError, ValidationError
from session_core.domain.models import DispatchState, QuickActionRequest, QuickActionResult
from session_core.providers.base import QuickActionBackend
from session_core.providers.registry import ModelId, ModelRegistry
from session_core.quick_actions.actions import QuickActionKind, resolve_action
from session_core.quick_actions.normalizer import failure, normalize
from session_core.quick_actions.trace import DispatchTracer


DispatchKey = Tuple[str, str]


class QuickActionDispatcher:
    """对外统一的 Quick Action 入口。

    Args:
        backend: 网络调用协作者，实现 QuickActionBackend 协议。
        registry: 可选模型目录；提供时 model 参数会先经过 resolve 校验。
        tracer: 可选追踪器；不传则内部创建一个。
    """

    def __init__(
        self,
        backend: QuickActionBackend,
        *,
        registry: Optional[ModelRegistry] = None,
        tracer: Optional[DispatchTracer] = None,
    ):
        self._backend = backend
        self._registry = registry
        self._tracer = tracer or DispatchTracer()
        self._states: Dict[DispatchKey, DispatchState] = {}

    @property
    def tracer(self) -> DispatchTracer:
        return self._tracer

    def state(self, action_name: str, document_id: str) -> DispatchState:
        """查询某个组合的当前状态；无法识别的动作视为 IDLE。"""

        key = self._key_or_none(action_name, document_id)
        if key is None:
            return DispatchState.IDLE
        return self._states.get(key, DispatchState.IDLE)

    def pending_keys(self) -> List[DispatchKey]:
        return [k for k, s in self._states.items() if s is DispatchState.PENDING]

    def discard(self, action_name: str, document_id: str) -> bool:
        """UI 丢弃已完成的结果，状态回到 IDLE。

        在途（PENDING）的组合不会被丢弃，返回 False。
        """

        key = self._key_or_none(action_name, document_id)
        if key is None or self._states.get(key) is DispatchState.PENDING:
            return False
        return self._states.pop(key, None) is not None

    async def dispatch(
        self,
        action_name: str,
        document_id: str,
        *,
        model: Optional[ModelId] = None,
        client_id: Optional[str] = None,
    ) -> QuickActionResult:
        """执行一次 Quick Action。

        Raises:
            ValidationError: document_id 为空或动作无法识别（不会发起网络请求）。
            ConcurrentDispatchError: 同一组合已有请求在途。
        """

        kind, document_id = self._validate(action_name, document_id)
        model_id = self._resolve_model(model)
        key: DispatchKey = (document_id, kind.id)
        if self._states.get(key) is DispatchState.PENDING:
            self._tracer.record("dispatch_rejected", action=kind.id, document_id=document_id, reason="duplicate")
            raise ConcurrentDispatchError(kind.id, document_id)

        req = QuickActionRequest(
            action=kind.id,
            document_id=document_id,
            model=model_id,
            client_id=client_id,
        )
        self._tracer.record(
            "dispatch_start",
            action=kind.id,
            document_id=document_id,
            model=req.model,
            backend=getattr(self._backend, "name", type(self._backend).__name__),
        )

        # 置为 PENDING 之后只剩 await 后端
        self._states[key] = DispatchState.PENDING
        try:
            raw = await self._backend.run_action(req)
        except asyncio.CancelledError:
            # 调用方已离开，结果不再需要；状态回到 IDLE，允许重新发起
            self._states.pop(key, None)
            self._tracer.record("dispatch_cancelled", action=kind.id, document_id=document_id)
            raise
        except BackendError as e:
            return self._fail(key, kind, e.message, code=e.code)
        except Exception as e:
            return self._fail(key, kind, str(e) or type(e).__name__, code="UNEXPECTED_ERROR")

        result = normalize(raw)
        self._tracer.record(
            "normalized",
            action=kind.id,
            document_id=document_id,
            success=result.success,
            dialect=_dialect(raw),
        )
        if result.success:
            self._states[key] = DispatchState.SUCCEEDED
            self._tracer.record("dispatch_succeeded", action=kind.id, document_id=document_id)
        else:
            self._states[key] = DispatchState.FAILED
            self._tracer.record(
                "dispatch_failed",
                action=kind.id,
                document_id=document_id,
                code="BACKEND_REPORTED_FAILURE",
                error=result.error_message,
            )
        return result

    def _validate(self, action_name: str, document_id: str) -> Tuple[QuickActionKind, str]:
        if not isinstance(document_id, str) or not document_id.strip():
            self._tracer.record(
                "dispatch_rejected",
                action=str(action_name),
                document_id=str(document_id or ""),
                reason="empty_document_id",
            )
            raise ValidationError(code="EMPTY_DOCUMENT_ID", message="document_id must not be empty")
        try:
            return resolve_action(action_name), document_id.strip()
        except ValidationError:
            self._tracer.record(
                "dispatch_rejected",
                action=str(action_name),
                document_id=document_id,
                reason="unknown_action",
            )
            raise

    def _fail(self, key: DispatchKey, kind: QuickActionKind, message: str, *, code: str) -> QuickActionResult:
        self._states[key] = DispatchState.FAILED
        error_message = f"{kind.label} failed: {message}"
        self._tracer.record("dispatch_failed", action=kind.id, document_id=key[0], code=code, error=error_message)
        return failure(error_message)

    def _resolve_model(self, model: Optional[ModelId]) -> Optional[str]:
        if self._registry is not None:
            return self._registry.resolve(model).id.value
        if model is None:
            return None
        return getattr(model, "value", None) or str(model)

    @staticmethod
    def _key_or_none(action_name: str, document_id: str) -> Optional[DispatchKey]:
        try:
            kind = resolve_action(action_name)
        except ValidationError:
            return None
        if not isinstance(document_id, str):
            return None
        return (document_id.strip(), kind.id)


def _dialect(raw: Any) -> str:
    if not isinstance(raw, dict):
        return "unknown"
    if _is_text(raw.get("analysis")):
        return "analysis"
    if _is_text(raw.get("response")):
        return "response"
    return "empty"


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""
