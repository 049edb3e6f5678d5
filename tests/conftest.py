import pytest
import json
from pathlib import Path

from app.services.bill_service import BillService
from app.services.course_resolver import CourseResolver


@pytest.fixture(scope="session")
def courses_data():
    """
    테스트 세션이 시작될 때 courses.json 파일을 한 번만 로드하여
    그 내용을 테스트 내내 제공하는 픽스처입니다.
    """
    path = Path(__file__).parent.parent / "app/data/courses.json"
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        pytest.fail(f"테스트에 필요한 courses.json 파일을 찾을 수 없습니다. 경로: {path}")


@pytest.fixture
def resolver():
    return CourseResolver()


@pytest.fixture
def bill_service(resolver):
    return BillService(resolver=resolver)
