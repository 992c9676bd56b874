"""案件管理后端的 Quick Action 适配器。

本模块负责：

1. 接收统一的 QuickActionRequest。
2. 将其转换为后端 ``/api/v2/ai/process`` 的请求体。
3. 调用 HTTP 接口并把网络/API 异常映射为 BackendError 子类。
4. 原样返回响应 JSON。

响应有两种方言（analysis 字段 / response 字段），这里不做任何解析，
统一交给 quick_actions.normalizer 处理。
"""

from typing import Any, Dict

import httpx

from session_core.domain.exceptions import ApiError, NetworkError, RateLimitError
from session_core.domain.models import QuickActionRequest


PROCESS_PATH = "/api/v2/ai/process"


class HttpQuickActionBackend:
    """基于 httpx.AsyncClient 的后端实现。"""

    name = "http"

    def __init__(self, settings):
        # Settings 里包含 api_base_url、api_token、超时等配置
        self._settings = settings

    async def run_action(self, req: QuickActionRequest) -> Any:
        """执行一次 Quick Action 调用。

        步骤：
        1. 构造请求体与鉴权头。
        2. 发送请求并捕获网络错误/限流/服务端错误。
        3. 解析 JSON 并原样返回。
        """

        payload = self._build_payload(req)
        try:
            async with httpx.AsyncClient(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = await client.post(
                    f"{self._base_url()}{PROCESS_PATH}",
                    json=payload,
                    headers=self._headers(),
                )
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接超时等
            raise NetworkError(code="NETWORK_ERROR", message=str(e) or type(e).__name__)
        if resp.status_code == 429:
            raise RateLimitError(code="RATE_LIMIT", message="Backend rate limit", http_status=429)
        if resp.status_code >= 400:
            raise ApiError(
                code="API_ERROR",
                message=f"API request failed: {resp.status_code} {resp.text}",
                http_status=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(code="INVALID_JSON", message=f"Backend returned invalid JSON: {e}", http_status=502)

    def _build_payload(self, req: QuickActionRequest) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "action": req.action,
            "documents": [req.document_id],
        }
        if req.model:
            payload["model"] = req.model
        client_id = req.client_id or getattr(self._settings, "default_client_id", None)
        if client_id:
            payload["client_id"] = client_id
        return payload

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = getattr(self._settings, "api_token", None)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _base_url(self) -> str:
        return (getattr(self._settings, "api_base_url", None) or "http://localhost:8000").rstrip("/")
