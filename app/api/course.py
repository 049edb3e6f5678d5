from typing import List
from fastapi import APIRouter, Depends

from app.api.dependencies import get_course_resolver
from app.core.response import ApiResponse, success_response
from app.models.course import CourseDefinition
from app.services.course_resolver import CourseResolver

router = APIRouter(prefix="/api/courses")


@router.get("/", response_model=ApiResponse[List[CourseDefinition]])
@router.get("", response_model=ApiResponse[List[CourseDefinition]])
def list_courses(resolver: CourseResolver = Depends(get_course_resolver)):
    return success_response(resolver.list_courses())
