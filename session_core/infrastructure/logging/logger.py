"""会话层日志。

所有模块共用名为 ``session_core`` 的 logger，输出 JSON Lines 到
``{settings.log_dir}/session.log``。附加字段通过
``logger.info(msg, extra={"extra": {...}})`` 传入，会被平铺到同一行 JSON 中。
开启 log_redact_content 后，消息正文与 REDACTED_FIELDS 中的字段会被截断。
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from session_core.config.settings import settings


LOG_FILE_NAME = "session.log"
REDACT_LIMIT = 64
# 可能包含客户文档内容或后端原文的字段
REDACTED_FIELDS = ("error", "analysis_text", "details")


class JsonLineFormatter(logging.Formatter):
    def __init__(self, redact: bool = False):
        super().__init__()
        self._redact = redact

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
            "msg": self._clip(record.getMessage()),
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            for key, value in extra.items():
                if key in REDACTED_FIELDS and isinstance(value, str):
                    value = self._clip(value)
                payload[key] = value
        return json.dumps(payload, ensure_ascii=False, default=str)

    def _clip(self, text: Optional[str]) -> str:
        text = text or ""
        return text[:REDACT_LIMIT] if self._redact else text


def log_path() -> Path:
    return Path(settings.log_dir) / LOG_FILE_NAME


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("session_core")
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return logger
    path = log_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(path, encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(JsonLineFormatter(redact=settings.log_redact_content))
    logger.addHandler(fh)
    logger.info(
        "Session logger ready",
        extra={"extra": {"log_file": str(path.resolve()), "redact": settings.log_redact_content}},
    )
    return logger


logger = setup_logger()
