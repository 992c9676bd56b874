"""模型目录与选择校验。

UI 上可选的模型列表在这里集中定义：

- MODEL_OPTIONS：固定顺序的模型目录，用于下拉框等选择控件。
- ModelRegistry.resolve：把（可能过期或损坏的）持久化选择映射回目录中的一项，
  找不到时返回默认模型，保证 UI 不会因为旧数据而崩溃。
- ModelRegistry.describe：统一的展示文案，所有展示模型名称的地方都应调用它。
"""

from typing import Optional, Sequence, Tuple, Union

from session_core.domain.exceptions import ValidationError
from session_core.domain.models import AIModel, ModelOption


MODEL_OPTIONS: Tuple[ModelOption, ...] = (
    ModelOption(id=AIModel.GPT_4O_MINI, name="GPT-4o mini", description="Fast & Efficient"),
    ModelOption(id=AIModel.GPT_4O, name="GPT-4o", description="Powerful & Accurate"),
    ModelOption(id=AIModel.GPT_4_TURBO, name="GPT-4 Turbo", description="Advanced Reasoning"),
    ModelOption(id=AIModel.CLAUDE_3_7_SONNET, name="Claude 3.7 Sonnet", description="Excellent Legal Analysis"),
    ModelOption(id=AIModel.DEEPSEEK_CODER, name="Deepseek Coder", description="Code & Technical Analysis"),
)

DEFAULT_MODEL = AIModel.GPT_4O_MINI

ModelId = Union[AIModel, str]


class ModelRegistry:
    """只读模型目录。"""

    def __init__(
        self,
        options: Sequence[ModelOption] = MODEL_OPTIONS,
        default_id: ModelId = DEFAULT_MODEL,
    ):
        if not options:
            raise ValidationError(code="EMPTY_MODEL_CATALOG", message="Model catalog must not be empty")
        self._options: Tuple[ModelOption, ...] = tuple(options)
        default = self._find(default_id)
        if default is None:
            raise ValidationError(
                code="UNKNOWN_DEFAULT_MODEL",
                message=f"Default model {default_id!r} is not in the catalog",
            )
        self._default = default

    @property
    def default(self) -> ModelOption:
        return self._default

    def list_options(self) -> Tuple[ModelOption, ...]:
        return self._options

    def contains(self, selected_id: Optional[ModelId]) -> bool:
        return self._find(selected_id) is not None

    def resolve(self, selected_id: Optional[ModelId]) -> ModelOption:
        option = self._find(selected_id)
        return option if option is not None else self._default

    @staticmethod
    def describe(option: ModelOption) -> str:
        return f"{option.name} ({option.description})"

    def _find(self, selected_id: Optional[ModelId]) -> Optional[ModelOption]:
        if not selected_id:
            return None
        key = selected_id.value if isinstance(selected_id, AIModel) else str(selected_id)
        for option in self._options:
            if option.id.value == key:
                return option
        return None
