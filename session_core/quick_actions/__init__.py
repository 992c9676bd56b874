"""Quick Action 调度：动作目录、响应归一化、调度状态机与追踪。"""

from .actions import QUICK_ACTIONS, QuickActionKind, resolve_action
from .dispatcher import QuickActionDispatcher
from .normalizer import NO_ANALYSIS, normalize
from .trace import DispatchTracer, TraceEvent

__all__ = [
    "QUICK_ACTIONS",
    "QuickActionKind",
    "resolve_action",
    "QuickActionDispatcher",
    "NO_ANALYSIS",
    "normalize",
    "DispatchTracer",
    "TraceEvent",
]
