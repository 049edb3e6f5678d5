"""
정산 서비스 (BillService)

역할:
    CourseResolver -> ExtensionCalculator -> NightSurchargeAggregator 순으로
    요청 하나를 계산해 Bill을 만듭니다.

Rationale:
    각 단계는 상태를 갖지 않으므로 같은 BillService 인스턴스를 여러 요청(스레드)에서
    공유해도 됩니다.

실행: pytest tests/services/test_bill_service.py -v
"""

import logging
from typing import Optional

from app.models.bill import Bill
from app.models.dto import BillingRequest
from app.services.course_resolver import CourseResolver
from app.services.extension_service import ExtensionCalculator
from app.services.night_surcharge_service import NightSurchargeAggregator

logger = logging.getLogger("app")


class BillService:
    """라운지 이용 요금 정산 서비스"""

    def __init__(
        self,
        resolver: Optional[CourseResolver] = None,
        calculator: Optional[ExtensionCalculator] = None,
        aggregator: Optional[NightSurchargeAggregator] = None,
    ):
        self.resolver = resolver or CourseResolver()
        self.calculator = calculator or ExtensionCalculator()
        self.aggregator = aggregator or NightSurchargeAggregator()

    def create_bill(self, request: BillingRequest) -> Bill:
        """
        Compute the bill for a single visit.

        Parameters:
            request (BillingRequest): Course identifier plus timezone-aware entry/exit instants.

        Returns:
            Bill: Course fee, priced extension blocks and totals.

        Raises:
            UnknownCourseError: If the course identifier is not in the catalog.
        """
        course = self.resolver.resolve(request.course)

        # 1. 코스 시간 초과분 -> 연장 블록 수
        extension = self.calculator.calculate(
            request.entry_time, request.exit_time, course.base_duration_hours
        )

        # 2. 블록별 심야 판정 및 합산
        surcharge = self.aggregator.aggregate(extension)

        bill = Bill(
            course=course,
            entry_time=request.entry_time,
            exit_time=request.exit_time,
            extension=extension,
            blocks=surcharge.blocks,
            extension_fee_total=surcharge.extension_fee_total,
        )

        logger.info({
            "message": "bill computed",
            "course": course.identifier.value,
            "extension_blocks": extension.block_count,
            "night_blocks": surcharge.night_block_count,
            "total_pre_tax": bill.total_pre_tax,
        })
        return bill
