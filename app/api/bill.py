from fastapi import APIRouter, Depends

from app.api.dependencies import get_bill_service
from app.core.response import ApiResponse, success_response
from app.models.dto import BillingRequest, BillSummary
from app.services.bill_service import BillService

router = APIRouter(prefix="/api/bills")


@router.post("/", response_model=ApiResponse[BillSummary])
@router.post("", response_model=ApiResponse[BillSummary])
def create_bill(req: BillingRequest, service: BillService = Depends(get_bill_service)):
    # 존재하지 않는 코스(UnknownCourseError)는 전역 핸들러가 404 envelope으로 변환
    bill = service.create_bill(req)
    return success_response(bill.to_summary())
