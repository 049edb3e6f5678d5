from app.exception.base_exception import BaseCustomException, ErrorCode


class UnknownCourseError(BaseCustomException):
    """카탈로그에 없는 코스 식별자"""
    error_code = ErrorCode.COURSE_NOT_FOUND
    message = "입력된 코스가 존재하지 않습니다."
    status_code = 404

    def __init__(self, identifier: str):
        super().__init__(message=f"입력된 코스가 존재하지 않습니다: {identifier}")
        self.identifier = identifier


class CourseCatalogError(BaseCustomException):
    """코스 카탈로그 파일 로드/검증 실패"""
    error_code = ErrorCode.COURSE_CATALOG_INVALID
    message = "코스 카탈로그를 불러올 수 없습니다."
    status_code = 500
