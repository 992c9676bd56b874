"""可识别的 Quick Action 种类。

UI 上的按钮文案（如 "Extract Dates"）和后端动作 ID（如 "extract_dates"）
都可以作为 action_name 传入，resolve_action 统一映射到 QuickActionKind。
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from session_core.domain.exceptions import ValidationError


@dataclass(frozen=True)
class QuickActionKind:
    id: str
    label: str


QUICK_ACTIONS: Tuple[QuickActionKind, ...] = (
    QuickActionKind(id="analyze", label="Analyze Document"),
    QuickActionKind(id="summarize", label="Summarize Document"),
    QuickActionKind(id="extract_dates", label="Extract Dates"),
    QuickActionKind(id="prepare_for_court", label="Prepare for Court"),
    QuickActionKind(id="reply_to_letter", label="Reply to Letter"),
)

_BY_ID: Dict[str, QuickActionKind] = {k.id: k for k in QUICK_ACTIONS}
_BY_LABEL: Dict[str, QuickActionKind] = {k.label: k for k in QUICK_ACTIONS}


def find_action(name: Optional[str]) -> Optional[QuickActionKind]:
    if not isinstance(name, str) or not name.strip():
        return None
    name = name.strip()
    kind = _BY_ID.get(name) or _BY_LABEL.get(name)
    if kind is not None:
        return kind
    return _BY_ID.get(name.lower().replace(" ", "_"))


def resolve_action(name: Optional[str]) -> QuickActionKind:
    """把动作名称映射为 QuickActionKind，无法识别时抛出 ValidationError。"""

    kind = find_action(name)
    if kind is None:
        raise ValidationError(code="UNKNOWN_ACTION", message=f"Unknown quick action: {name!r}", action=name)
    return kind
