import contextvars
from typing import Optional

# 요청 단위 Trace ID 추적용 ContextVar
# Rationale: 요금 계산 로그마다 request 객체를 넘기지 않고도 어떤 요청의 정산인지 식별하기 위해 사용합니다.
trace_id_context: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("trace_id", default=None)

def get_trace_id() -> Optional[str]:
    """현재 컨텍스트의 Trace ID를 반환합니다."""
    return trace_id_context.get()

def set_trace_id(trace_id: Optional[str]) -> None:
    """현재 컨텍스트에 Trace ID를 설정합니다."""
    trace_id_context.set(trace_id)
