"""Quick Action 后端抽象接口。

QuickActionDispatcher 不直接依赖 HTTP 细节，而是依赖此协议：

- 生产环境使用 HttpQuickActionBackend（httpx 异步客户端）。
- 测试中注入简单的桩对象，统计调用次数、控制返回时机。

实现者返回后端的原始响应（任意形状的 JSON 对象），
失败时抛出 domain.exceptions.BackendError 的子类。
"""

from typing import Any, Protocol

from session_core.domain.models import QuickActionRequest


class QuickActionBackend(Protocol):
    """Quick Action 后端协议。

    - name: 后端名称，用于日志/追踪。
    - run_action(req): 执行一次调用，返回原始响应。
    """

    name: str

    async def run_action(self, req: QuickActionRequest) -> Any:
        ...
