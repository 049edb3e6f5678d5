# =============================================================================
# 요청 추적 / 캐시 방지 미들웨어
# =============================================================================
# - X-Trace-ID: 정산 요청별 로그 추적
# - Cache-Control: 요금 계산 결과 캐시 방지
# =============================================================================

import logging
import uuid
import re
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from app.core.context import set_trace_id

logger = logging.getLogger(__name__)

# UUID 형식 검증 정규식 (8-4-4-4-12)
UUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$',
    re.IGNORECASE
)

TRACE_ID_HEADER = "X-Trace-ID"


class TraceIDMiddleware(BaseHTTPMiddleware):
    """
    HTTP 요청 추적을 위한 Trace ID 관리 미들웨어

    - 요청 헤더(X-Trace-ID)가 UUID 형식이면 해당 값을 사용
    - 없거나 형식이 잘못되었으면 새로운 UUIDv4를 발급
    - 응답 헤더(X-Trace-ID)에 포함하여 클라이언트에 반환
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        trace_id = request.headers.get(TRACE_ID_HEADER)

        # 형식이 올바르지 않으면 무시하고 새로 발급
        if trace_id and not UUID_PATTERN.match(trace_id):
            logger.warning(f"Invalid Trace ID received: {trace_id}")
            trace_id = None

        if not trace_id:
            trace_id = str(uuid.uuid4())

        set_trace_id(trace_id)
        request.state.trace_id = trace_id

        response = await call_next(request)

        response.headers[TRACE_ID_HEADER] = trace_id
        return response


class CacheControlMiddleware(BaseHTTPMiddleware):
    """
    /api 경로 응답에 캐시 방지 헤더를 추가합니다.
    정산 결과는 입퇴점 시각마다 달라지므로 프록시 캐시에 남으면 안 됩니다.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        if request.url.path.startswith("/api"):
            response.headers["Cache-Control"] = (
                "no-store, no-cache, must-revalidate, max-age=0"
            )
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"

        return response
