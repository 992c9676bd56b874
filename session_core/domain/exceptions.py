"""统一业务异常模型。

所有跨模块抛出的业务级错误都继承自 BusinessError，
便于在 API 层或 UI 层做统一捕获与用户提示。

传播策略：
- ValidationError / ConcurrentDispatchError 直接抛给调用方（调用约定被违反）。
- BackendError 及其子类由 QuickActionDispatcher 转换为失败的 QuickActionResult。
- StorageError 在存储层内部被吸收并记录日志，不会传到 UI。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "STORE_READ_ERROR"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 document_id、action 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class ValidationError(BusinessError):
    """参数或配置校验失败，例如空的 document_id 或未知的 action。"""


class ConcurrentDispatchError(BusinessError):
    """同一 (document_id, action) 已有请求在处理中。"""

    def __init__(self, action: str, document_id: str):
        super().__init__(
            code="DUPLICATE_IN_FLIGHT",
            message=f"{action} is already processing for document {document_id}",
            http_status=409,
            action=action,
            document_id=document_id,
        )


class BackendError(BusinessError):
    """Quick Action 后端调用失败的基类。"""


class NetworkError(BackendError):
    """网络层错误，例如连接失败、超时等。"""


class ApiError(BackendError):
    """后端返回非 2xx/429 错误，或响应体无法解析时抛出。"""


class RateLimitError(BackendError):
    """后端限流。本层不做重试，只把错误反馈给用户。"""


class StorageError(BusinessError):
    """持久化键值存储读写失败。"""
