"""模型目录与 Quick Action 后端集成层。

该包下的模块负责：
- 定义后端抽象接口 (base)。
- 维护模型目录与选择校验 (registry)。
- 提供具体的后端实现 (http_backend)。
"""

from typing import Optional

from session_core.config.settings import settings
from session_core.infrastructure.logging.logger import logger
from session_core.providers.base import QuickActionBackend
from session_core.providers.http_backend import HttpQuickActionBackend
from session_core.providers.registry import DEFAULT_MODEL, MODEL_OPTIONS, ModelRegistry


def create_backend(name: Optional[str] = None) -> QuickActionBackend:
    """根据名称创建后端实例，目前只有 http 一种。"""

    backend_name = (name or "http").lower()
    if backend_name != "http":
        logger.warning(f"Unknown backend {backend_name!r}, using http")
    return HttpQuickActionBackend(settings)


def create_model_registry() -> ModelRegistry:
    """按配置的 default_model 创建模型目录；配置无效时保留内置默认值。"""

    configured = getattr(settings, "default_model", None) or DEFAULT_MODEL
    probe = ModelRegistry(MODEL_OPTIONS, DEFAULT_MODEL)
    if not probe.contains(configured):
        logger.warning(
            f"Configured default model {configured!r} is not in the catalog",
            extra={"extra": {"default_model": DEFAULT_MODEL.value}},
        )
        return probe
    return ModelRegistry(MODEL_OPTIONS, configured)
