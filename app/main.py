from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.api.bill import router as bill_router
from app.api.course import router as course_router
from app.exception.base_exception import BaseCustomException
from app.exception.envelope_handlers import (
    custom_exception_handler,
    global_exception_handler_envelope,
    http_exception_handler,
    validation_exception_handler,
)
from app.core.logging_config import setup_logging
from app.core.middleware import CacheControlMiddleware, TraceIDMiddleware
from app.core.config import ALLOWED_ORIGINS, LOG_DIR

app = FastAPI(title="Lounge Billing API")

@app.get("/ping")
def ping():
    return {"ok": True}

# 미들웨어는 나중에 추가한 것이 바깥쪽에서 실행됨 (TraceID가 가장 먼저 설정되도록 마지막에 추가)
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CacheControlMiddleware)
app.add_middleware(TraceIDMiddleware)

# API 라우터 포함
app.include_router(course_router)
app.include_router(bill_router)

# 커스텀 예외 핸들러는 라우터 포함 이후에 추가
app.add_exception_handler(BaseCustomException, custom_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler_envelope)

# 로깅 설정(콘솔 + LOG_DIR 지정 시 일자별 파일 로테이션, JSON 포맷)
setup_logging(LOG_DIR)
