"""会话层服务：客户会话 ID 持久化与模型选择。"""

from session_core.services.conversation_store import ConversationStore
from session_core.services.model_selection import ModelSelection, SELECTED_MODEL_KEY

__all__ = ["ConversationStore", "ModelSelection", "SELECTED_MODEL_KEY"]
