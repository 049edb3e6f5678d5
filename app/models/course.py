from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class CourseType(str, Enum):
    """입점 시 선택 가능한 코스 식별자 (카탈로그 키)"""
    STANDARD = "standard"
    THREE_HOUR_PACK = "3-hour pack"
    FIVE_HOUR_PACK = "5-hour pack"
    EIGHT_HOUR_PACK = "8-hour pack"


class CourseDefinition(BaseModel):
    """코스 카탈로그의 한 항목 (app/data/courses.json)"""
    model_config = ConfigDict(frozen=True)

    identifier: CourseType = Field(..., description="Course identifier")
    base_fee: int = Field(..., ge=0, description="Course fee before tax")
    base_duration_hours: int = Field(..., gt=0, description="Hours included in the course fee")
