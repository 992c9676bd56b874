"""领域层模型与协议。

包含：
- models: AIModel / ModelOption / QuickActionRequest / QuickActionResult / DispatchState。
- conversation: ConversationSession 与 KeyValueBackend 存储协议。
- exceptions: 业务异常类型定义。
"""
