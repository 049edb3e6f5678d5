import logging
import json
import os
from logging.handlers import TimedRotatingFileHandler
from typing import Optional

from app.core.context import get_trace_id


class TraceIdFilter(logging.Filter):
    """현재 요청의 Trace ID를 LogRecord에 주입합니다. (요청 밖에서는 None)"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_trace_id()
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        # 메시지가 dict면 그대로 기반으로 삼고, 아니면 기본 구조 생성
        base_message = record.msg if isinstance(record.msg, dict) else {
            "message": record.getMessage()
        }

        log = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "trace_id": getattr(record, "trace_id", None),
            **base_message,
        }

        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)

        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(log_dir: Optional[str] = None, level: int = logging.INFO):
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    json_formatter = JsonFormatter()
    trace_filter = TraceIdFilter()

    # 재호출 시 핸들러 중복 등록 방지
    for handler in list(root_logger.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            root_logger.removeHandler(handler)

    # 콘솔 핸들러
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(json_formatter)
    console_handler.addFilter(trace_filter)
    root_logger.addHandler(console_handler)

    if not log_dir:
        return

    os.makedirs(log_dir, exist_ok=True)

    # 일자별 파일 로테이션 핸들러 (자정 기준, 7일 보관)
    file_handler = TimedRotatingFileHandler(
        filename=os.path.join(log_dir, "app.log"),
        when="midnight",
        backupCount=7,
        encoding="utf-8",
        utc=False,
    )
    file_handler.setFormatter(json_formatter)
    file_handler.addFilter(trace_filter)
    root_logger.addHandler(file_handler)
