from __future__ import annotations
from functools import lru_cache
from fastapi import Depends
from app.services.bill_service import BillService
from app.services.course_resolver import CourseResolver


@lru_cache(maxsize=1)
def get_course_resolver() -> CourseResolver:
    """
    CourseResolver 의존성 주입 (Singleton via lru_cache)

    카탈로그 파일은 프로세스당 한 번만 읽습니다.
    """
    return CourseResolver()


def get_bill_service(
    resolver: CourseResolver = Depends(get_course_resolver)
) -> BillService:
    """BillService 인스턴스 반환 (DI용)."""
    return BillService(resolver=resolver)
