"""后端响应 → QuickActionResult 的统一转换。

后端存在两种响应方言：

- 分析类：``{"success": true, "analysis": "..."}``
- 回信/对话类：``{"success": true, "response": "..."}``

normalize 依次尝试 analysis、response，再回退到固定文案，
这一优先级是兼容两种方言的约定，不要调整顺序。
无论输入是什么形状，normalize 都不会抛出异常。
"""

from collections.abc import Mapping
from typing import Any, Optional, Sequence

from session_core.domain.models import QuickActionResult


NO_ANALYSIS = "No analysis available"
TEXT_FIELDS = ("analysis", "response")


def normalize(raw_response: Any) -> QuickActionResult:
    if raw_response is None:
        return QuickActionResult(success=False, analysis_text="", raw={}, error_message=NO_ANALYSIS)

    # 非对象响应（字符串、列表等）视为没有任何字段
    fields = raw_response if isinstance(raw_response, Mapping) else {}
    text = _first_text(fields, TEXT_FIELDS)
    flag = _field(fields, "success")
    success = flag if isinstance(flag, bool) else text is not None
    return QuickActionResult(
        success=success,
        analysis_text=text if text is not None else NO_ANALYSIS,
        raw=raw_response,
        error_message=None if success else _error_message(fields),
    )


def failure(message: str, raw: Any = None) -> QuickActionResult:
    """后端调用本身失败（网络、HTTP 错误）时的结果。"""

    return QuickActionResult(
        success=False,
        analysis_text="",
        raw=raw if raw is not None else {},
        error_message=message or NO_ANALYSIS,
    )


def _field(fields: Mapping, name: str) -> Any:
    try:
        return fields.get(name)
    except Exception:
        return None


def _first_text(fields: Mapping, names: Sequence[str]) -> Optional[str]:
    for name in names:
        value = _field(fields, name)
        if isinstance(value, str) and value:
            return value
    return None


def _error_message(fields: Mapping) -> str:
    error = _field(fields, "error")
    details = _field(fields, "details")
    if isinstance(error, str) and error:
        if isinstance(details, str) and details:
            return f"{error}: {details}"
        return error
    return NO_ANALYSIS
