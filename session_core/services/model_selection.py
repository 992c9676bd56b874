from typing import Optional, Tuple

from session_core.domain.models import ModelOption
from session_core.infrastructure.logging.logger import logger
from session_core.infrastructure.storage.key_store import PersistentKeyStore
from session_core.providers.registry import ModelId, ModelRegistry


SELECTED_MODEL_KEY = "selectedAIModel"


class ModelSelection:
    """当前选中的模型，持久化在 ``selectedAIModel`` 键下。

    持久化值不在目录中（模型下线、手工改坏）时，回写默认模型。
    """

    def __init__(self, registry: ModelRegistry, key_store: PersistentKeyStore):
        self._registry = registry
        self._store = key_store

    @property
    def registry(self) -> ModelRegistry:
        return self._registry

    def options(self) -> Tuple[ModelOption, ...]:
        return self._registry.list_options()

    def current(self) -> ModelOption:
        saved: Optional[str] = self._store.get(SELECTED_MODEL_KEY)
        if saved and self._registry.contains(saved):
            return self._registry.resolve(saved)
        default = self._registry.default
        if saved:
            logger.warning(
                "Persisted model selection is not in the catalog, resetting",
                extra={"extra": {"saved": saved, "default": default.id.value}},
            )
        self._store.set(SELECTED_MODEL_KEY, default.id.value)
        return default

    def select(self, model_id: Optional[ModelId]) -> ModelOption:
        option = self._registry.resolve(model_id)
        self._store.set(SELECTED_MODEL_KEY, option.id.value)
        logger.info("Model selected", extra={"extra": {"model": option.id.value}})
        return option
