import json
import logging
from typing import List

from pydantic import ValidationError

from app.core.paths import pkg_data_path
from app.exception.course.course_exception import CourseCatalogError
from app.models.course import CourseDefinition

logger = logging.getLogger("app")

COURSES_FILE = "courses.json"


def load_courses() -> List[CourseDefinition]:
    """courses.json을 읽어 카탈로그 순서대로 CourseDefinition 목록을 반환합니다."""
    courses_file = pkg_data_path(COURSES_FILE)
    try:
        with courses_file.open(encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        logger.error(
            "courses.json not found",
            extra={"status": 500, "errorCode": "COURSE-002"}
        )
        raise
    except json.JSONDecodeError:
        logger.error(
            "courses.json decode error",
            extra={"status": 500, "errorCode": "COURSE-002"}
        )
        raise
    except OSError:
        logger.error(
            "courses.json IO error",
            extra={"status": 500, "errorCode": "COURSE-002"}
        )
        raise

    return parse_courses(raw)


def parse_courses(raw) -> List[CourseDefinition]:
    """
    원시 카탈로그(list[dict])를 검증하여 CourseDefinition 목록으로 변환합니다.

    Raises:
        CourseCatalogError: 리스트가 아니거나, 항목 검증에 실패하거나, 식별자가 중복된 경우
    """
    if not isinstance(raw, list):
        raise CourseCatalogError("코스 카탈로그는 리스트여야 합니다.")

    try:
        courses = [CourseDefinition(**item) for item in raw]
    except (TypeError, ValidationError) as e:
        raise CourseCatalogError(f"코스 카탈로그 항목이 올바르지 않습니다: {e}")

    seen = set()
    for course in courses:
        if course.identifier in seen:
            raise CourseCatalogError(f"코스 식별자가 중복되었습니다: {course.identifier.value}")
        seen.add(course.identifier)

    return courses
