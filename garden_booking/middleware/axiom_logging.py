"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data for every booking API call and sends
structured events to Axiom: endpoint, method, params, masked body,
status code, duration and error reason. Sensitive fields (password,
token, secret) are masked before anything leaves the process.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from garden_booking.config import settings

logger: logging.Logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴 (Fields to mask in request/response bodies)
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 (Paths excluded from logging)
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_MAX_DEPTH: int = 5
_MAX_LIST_ITEMS: int = 20


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 (Recursively mask sensitive fields in dicts/lists)."""
    if depth > _MAX_DEPTH:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:_MAX_LIST_ITEMS]]
    return data


def _truncate(value: Any, max_len: int = 2000) -> Any:
    """로그 크기 제한 (Truncate long strings to keep events small)."""
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


def _parse_request_body(body_bytes: bytes) -> Any:
    """요청 본문을 JSON으로 해석하고 마스킹합니다 (Decode, mask and truncate a JSON body)."""
    if not body_bytes:
        return None
    try:
        return _truncate(_mask_dict(json.loads(body_bytes)))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "(non-json body)"


def _extract_error_detail(body: bytes) -> str:
    """에러 응답 본문에서 사유를 추출합니다.

    Pull the FastAPI "detail" out of an error response. Validation errors
    carry a list there; it is serialized and shortened like any other detail.
    """
    try:
        data: Any = json.loads(body)
        detail: Any = data.get("detail", data) if isinstance(data, dict) else data
        text: str = detail if isinstance(detail, str) else json.dumps(detail)
    except (json.JSONDecodeError, UnicodeDecodeError):
        text = body.decode("utf-8", errors="replace")
    return text[:500] + "..." if len(text) > 500 else text


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs API requests and responses to Axiom.
    Without AXIOM_API_TOKEN and AXIOM_DATASET it passes requests through untouched.

    Args:
        app: ASGI 앱 (Wrapped ASGI application)
        client: Axiom 클라이언트, 생략 시 설정에서 생성 (Axiom client; built from settings when omitted)
        dataset: 데이터셋 이름 (Dataset name; defaults to AXIOM_DATASET)
    """

    def __init__(
        self,
        app: Any,
        client: AxiomClient | None = None,
        dataset: str | None = None,
    ) -> None:
        super().__init__(app)
        self._dataset: str = dataset if dataset is not None else settings.AXIOM_DATASET
        self._client: AxiomClient | None = client

        if self._client is None and settings.AXIOM_API_TOKEN and self._dataset:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS or self._client is None:
            return await call_next(request)

        start_time: float = time.time()
        method: str = request.method
        path: str = request.url.path
        query_params: dict[str, str] | None = dict(request.query_params) if request.query_params else None

        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            request_body = _parse_request_body(await request.body())

        error_detail: str | None = None
        status_code: int = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 후 다시 감싸기 (Read the error body, then re-wrap it)
            if status_code >= 400:
                resp_body: bytes = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error_detail = _extract_error_detail(resp_body)
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event: dict[str, Any] = {
                "app": settings.APP_NAME,
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }
            if query_params:
                log_event["query_params"] = _mask_dict(query_params)
            if request.path_params:
                log_event["path_params"] = dict(request.path_params)
            if request_body is not None:
                log_event["request_body"] = request_body
            if error_detail:
                log_event["error"] = error_detail

            try:
                self._client.ingest_events(self._dataset, [log_event])
            except Exception:
                # 로깅 실패가 요청 처리에 영향주지 않도록 (Log ingest failures never fail the request)
                logger.warning("Axiom ingest failed for %s %s", method, path, exc_info=True)

        return response
