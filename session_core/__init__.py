"""Session Core 顶层包。

该包提供案件管理应用中 AI 交互会话层的核心实现，
包括配置加载、领域模型、客户会话 ID 持久化、模型目录与选择、
Quick Action 调度与后端响应归一化等能力。
"""

from session_core.quick_actions import QuickActionDispatcher, normalize

__all__ = ["QuickActionDispatcher", "normalize"]
