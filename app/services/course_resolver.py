"""
코스 조회 서비스 (CourseResolver)

역할:
    - 코스 식별자 -> CourseDefinition(코스 요금, 코스 시간) 조회
    - 카탈로그는 CourseType을 키로 하는 조회 테이블이며, 코스 추가/요금 변경은
      app/data/courses.json 수정만으로 반영됩니다.

실행: pytest tests/services/test_course_resolver.py -v
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Union

from app.exception.course.course_exception import UnknownCourseError
from app.models.course import CourseDefinition, CourseType
from app.utils.course_loader import load_courses

logger = logging.getLogger("app")

CatalogLike = Union[Mapping[CourseType, CourseDefinition], Iterable[CourseDefinition]]


class CourseResolver:
    """코스 카탈로그 조회 서비스"""

    def __init__(self, catalog: Optional[CatalogLike] = None):
        if catalog is None:
            catalog = load_courses()
        if isinstance(catalog, Mapping):
            catalog = catalog.values()
        self._catalog: Dict[CourseType, CourseDefinition] = {
            course.identifier: course for course in catalog
        }

    def resolve(self, identifier: Union[CourseType, str]) -> CourseDefinition:
        """
        Look up the course definition for an identifier.

        Parameters:
            identifier (CourseType | str): Enumerated course or its string value (e.g. "5-hour pack").

        Returns:
            CourseDefinition: The catalog entry with base fee and base duration.

        Raises:
            UnknownCourseError: If the identifier has no entry in the catalog.
        """
        try:
            course_type = CourseType(identifier)
        except ValueError:
            course_type = None

        course = self._catalog.get(course_type) if course_type is not None else None
        if course is None:
            logger.warning({
                "message": "Unknown course requested",
                "course": str(getattr(identifier, "value", identifier)),
            })
            raise UnknownCourseError(str(getattr(identifier, "value", identifier)))
        return course

    def list_courses(self) -> List[CourseDefinition]:
        """카탈로그 순서대로 전체 코스를 반환합니다."""
        return list(self._catalog.values())
