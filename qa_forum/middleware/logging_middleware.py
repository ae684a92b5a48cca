"""
HTTP 请求日志中间件

记录所有 HTTP 请求的详细信息，包括：
- 是否携带 bearer token
- 请求方法和路径
- 请求 body（密码字段脱敏）
- 响应状态
- 处理时间
"""
import json
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from qa_forum.utils.logging_config import get_logger, setup_access_logging

# 使用请求专用logger
access_logger = setup_access_logging()
# 保留应用logger用于错误日志
logger = get_logger(__name__)

SENSITIVE_FIELDS = {"password", "passwd", "new_password", "token"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """记录所有 HTTP 请求的中间件"""

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        # 不记录 token 本身，只记录是否携带
        auth_state = "bearer" if request.headers.get("authorization") else "anonymous"

        body = None
        if request.method in ["POST", "PUT", "PATCH"]:
            try:
                body_bytes = await request.body()
                if body_bytes:
                    try:
                        body = self._mask_sensitive_fields(json.loads(body_bytes.decode("utf-8")))
                    except (json.JSONDecodeError, UnicodeDecodeError):
                        body = f"<binary data: {len(body_bytes)} bytes>"
            except Exception as e:
                logger.warning(f"Failed to read request body: {e}")

        access_logger.info(
            f"[REQUEST] {request.method} {request.url.path} | "
            f"Auth: {auth_state} | "
            f"Client: {request.client.host if request.client else 'unknown'}"
        )
        if body is not None:
            access_logger.info(
                f"[REQUEST BODY] {request.method} {request.url.path} | "
                f"Body: {json.dumps(body, ensure_ascii=False)}"
            )

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                f"[RESPONSE] {request.method} {request.url.path} | "
                f"Status: 500 (Exception) | "
                f"Duration: {duration:.3f}s | "
                f"Error: {str(e)}"
            )
            raise

        duration = time.time() - start_time
        access_logger.info(
            f"[RESPONSE] {request.method} {request.url.path} | "
            f"Status: {response.status_code} | "
            f"Duration: {duration:.3f}s"
        )
        return response

    def _mask_sensitive_fields(self, data):
        """隐藏敏感字段（如密码）"""
        if not isinstance(data, dict):
            return data

        masked = data.copy()
        for key in masked:
            if key.lower() in SENSITIVE_FIELDS:
                masked[key] = "***MASKED***"
            elif isinstance(masked[key], dict):
                masked[key] = self._mask_sensitive_fields(masked[key])
        return masked
