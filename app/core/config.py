import os
from datetime import time
from decimal import Decimal, InvalidOperation
from dotenv import load_dotenv

load_dotenv()

APP_ENV = os.getenv("APP_ENV", "production")
IS_DEBUG = APP_ENV == "development"


def _parse_int(name: str, default: str, minimum: int) -> int:
    raw = os.getenv(name, default)
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name}는 정수여야 합니다: {raw!r}")
    if value < minimum:
        raise ValueError(f"{name}는 {minimum} 이상이어야 합니다: {value}")
    return value


def _parse_decimal(name: str, default: str) -> Decimal:
    raw = os.getenv(name, default)
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"{name}는 숫자여야 합니다: {raw!r}")
    if value < 0:
        raise ValueError(f"{name}는 음수일 수 없습니다: {value}")
    return value


def _parse_time(name: str, default: str) -> time:
    raw = os.getenv(name, default)
    try:
        return time.fromisoformat(raw)
    except ValueError:
        raise ValueError(f"{name}는 HH:MM:SS 형식이어야 합니다: {raw!r}")


# 연장 요금 (코스 시간 초과 시 EXTENSION_BLOCK_MINUTES 단위로 부과, 세전)
EXTENSION_BLOCK_MINUTES = _parse_int("EXTENSION_BLOCK_MINUTES", "10", minimum=1)
EXTENSION_BASE_FEE = _parse_int("EXTENSION_BASE_FEE", "100", minimum=0)

# 심야 할증 (NIGHT_STARTS_AT 이상 ~ NIGHT_ENDS_AT 미만, 자정을 넘어가면 wrap)
NIGHT_FEE_MULTIPLIER = _parse_decimal("NIGHT_FEE_MULTIPLIER", "1.15")
NIGHT_STARTS_AT = _parse_time("NIGHT_STARTS_AT", "22:00:00")
NIGHT_ENDS_AT = _parse_time("NIGHT_ENDS_AT", "05:00:00")

if NIGHT_STARTS_AT == NIGHT_ENDS_AT:
    raise ValueError("NIGHT_STARTS_AT과 NIGHT_ENDS_AT은 같을 수 없습니다.")

# 소비세율 (10%)
TAX_RATE = _parse_decimal("TAX_RATE", "0.10")

# 로그 파일 디렉터리 (비어 있으면 콘솔 출력만)
LOG_DIR = os.getenv("LOG_DIR", "")


# CORS 허용 오리진 (환경변수 기반)
def _parse_origins(value: str | None) -> list[str]:
    if not value:
        return []
    normalized = value.replace("\n", ",").replace(";", ",")
    items = [item.strip() for item in normalized.split(",")]
    return [item for item in items if item]

_DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

# 중복 제거를 위해 dict 키 보존 방식 사용
ALLOWED_ORIGINS = list(dict.fromkeys(_DEFAULT_ALLOWED_ORIGINS + _parse_origins(os.getenv("CORS_ALLOWED_ORIGINS"))))
