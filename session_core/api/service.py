"""对外 API 服务模块。

提供简化的函数接口供 UI 层调用，内部维护进程级默认实例。
"""

from typing import Any, Dict, List, Optional

from session_core.config.settings import settings
from session_core.infrastructure.logging.logger import logger
from session_core.infrastructure.storage.json_store import JsonFileBackend
from session_core.infrastructure.storage.key_store import PersistentKeyStore
from session_core.providers import create_backend, create_model_registry
from session_core.providers.registry import ModelRegistry
from session_core.quick_actions.dispatcher import QuickActionDispatcher
from session_core.services.conversation_store import ConversationStore
from session_core.services.model_selection import ModelSelection


_key_store: Optional[PersistentKeyStore] = None
_registry: Optional[ModelRegistry] = None
_dispatcher: Optional[QuickActionDispatcher] = None


def get_key_store() -> PersistentKeyStore:
    """获取默认的持久化键值存储（单例）。"""
    global _key_store
    if _key_store is None:
        _key_store = PersistentKeyStore(JsonFileBackend(root=settings.storage_root))
    return _key_store


def get_model_registry() -> ModelRegistry:
    global _registry
    if _registry is None:
        _registry = create_model_registry()
    return _registry


def get_dispatcher() -> QuickActionDispatcher:
    """获取默认的 Quick Action 调度器（单例）。"""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = QuickActionDispatcher(create_backend(), registry=get_model_registry())
    return _dispatcher


def get_conversation_store() -> ConversationStore:
    return ConversationStore(get_key_store())


def get_model_selection() -> ModelSelection:
    return ModelSelection(get_model_registry(), get_key_store())


async def run_quick_action(
    action: str,
    document_id: str,
    model: Optional[str] = None,
    client_id: Optional[str] = None,
) -> Dict[str, Any]:
    """运行一次 Quick Action。

    Args:
        action: 动作 ID 或按钮文案，如 "analyze"、"Extract Dates"
        document_id: 目标文档 ID
        model: 模型 ID（可选，不提供则使用当前选中的模型）
        client_id: 客户 ID（可选）

    Returns:
        UI 约定的结果字典：success / analysisText / raw / errorMessage

    Raises:
        ValidationError: 参数非法
        ConcurrentDispatchError: 同一文档的同一动作正在处理
    """
    if model is None:
        model = get_model_selection().current().id.value
    try:
        result = await get_dispatcher().dispatch(action, document_id, model=model, client_id=client_id)
    except Exception as e:
        logger.error(f"Quick action rejected: {e}", extra={"extra": {
            "action": action,
            "document_id": document_id,
            "error": str(e),
        }})
        raise
    return result.to_payload()


def list_models() -> List[Dict[str, Any]]:
    """列出可选模型。

    Returns:
        模型列表，每项包含 id, name, description, label, selected
    """
    selection = get_model_selection()
    current = selection.current()
    registry = selection.registry
    return [
        {
            "id": o.id.value,
            "name": o.name,
            "description": o.description,
            "label": registry.describe(o),
            "selected": o.id == current.id,
        }
        for o in registry.list_options()
    ]


def select_model(model_id: str) -> Dict[str, Any]:
    option = get_model_selection().select(model_id)
    return {"id": option.id.value, "label": get_model_registry().describe(option)}


def remember_conversation(client_id: str, conversation_id: str) -> None:
    get_conversation_store().save(client_id, conversation_id)


def restore_conversation(client_id: str) -> Optional[str]:
    return get_conversation_store().load(client_id)


def reset_conversation(client_id: str) -> None:
    get_conversation_store().clear(client_id)
