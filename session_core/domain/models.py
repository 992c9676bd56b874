"""会话层共享的数据模型。

本模块定义了 UI、Dispatcher、Provider 之间共享的标准数据结构：

- AIModel / ModelOption: 可选 AI 模型及其展示信息。
- QuickActionRequest: Dispatcher 交给后端的一次 Quick Action 请求。
- QuickActionResult: 统一后的 Quick Action 结果（UI 只依赖这一结构）。
- DispatchState: 单个 (document_id, action) 的调度状态。

QuickActionResult 只能由 quick_actions.normalizer 构造，
其他模块不要直接实例化。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class AIModel(str, Enum):
    """可选模型 ID（值与后端接受的 model 字段一致）。"""

    GPT_4O_MINI = "gpt-4o-mini"
    GPT_4O = "gpt-4o"
    GPT_4_TURBO = "gpt-4-turbo"
    CLAUDE_3_7_SONNET = "claude-3-7-sonnet"
    DEEPSEEK_CODER = "deepseek-coder"


@dataclass(frozen=True)
class ModelOption:
    """模型目录中的一项，进程启动时加载，运行期不可变。"""

    id: AIModel
    name: str
    description: str


class DispatchState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class QuickActionRequest:
    """一次 Quick Action 调用。

    - action: 后端动作 ID，如 "analyze"、"extract_dates"。
    - document_id: 目标文档。
    - model: 模型 ID（已经过 ModelRegistry 校验）。
    - client_id: 可选客户 ID，后端用来关联案件上下文。
    """

    action: str
    document_id: str
    model: Optional[str] = None
    client_id: Optional[str] = None


@dataclass(frozen=True)
class QuickActionResult:
    """Quick Action 的统一结果。

    - success: 是否成功。
    - analysis_text: 展示给用户的分析文本。
    - raw: 后端原始响应，原样保留用于调试展示。
    - error_message: 失败时的用户可读信息。
    """

    success: bool
    analysis_text: str
    raw: Any = field(default_factory=dict)
    error_message: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """渲染为 UI 约定的字段名。"""

        payload: Dict[str, Any] = {
            "success": self.success,
            "analysisText": self.analysis_text,
            "raw": self.raw,
        }
        if self.error_message is not None:
            payload["errorMessage"] = self.error_message
        return payload
