"""
정산 도메인 모델

Bill은 한 번 계산된 뒤 변경되지 않는 값 객체입니다.
같은 BillingRequest로 두 번 계산하면 동일한(==) Bill이 만들어집니다.
"""

from datetime import timedelta, timezone
from decimal import Decimal
from typing import Optional, Tuple

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from app.core.config import TAX_RATE
from app.models.course import CourseDefinition
from app.models.dto import BillSummary
from app.services.tax import RateLike, apply_tax


class ExtensionPeriod(BaseModel):
    """코스 시간 이후의 연장 구간 (블록 단위로 올림된 결과)"""
    model_config = ConfigDict(frozen=True)

    starts_at: AwareDatetime = Field(..., description="입점 시각 + 코스 시간")
    ends_at: AwareDatetime = Field(..., description="퇴점 시각")
    block_length: timedelta
    block_count: int = Field(..., ge=0)

    @property
    def duration(self) -> timedelta:
        return self.block_length * self.block_count

    @property
    def minutes(self) -> int:
        return int(self.duration.total_seconds()) // 60


class ExtensionBlock(BaseModel):
    """연장 블록 하나 (index는 0부터)"""
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    starts_at: AwareDatetime
    ends_at: AwareDatetime
    is_night: bool
    fee: int = Field(..., ge=0)


class Bill(BaseModel):
    """코스 요금 + 연장 요금으로 구성된 정산서"""
    model_config = ConfigDict(frozen=True)

    course: CourseDefinition
    entry_time: AwareDatetime
    exit_time: AwareDatetime
    extension: ExtensionPeriod
    blocks: Tuple[ExtensionBlock, ...] = ()
    extension_fee_total: int = Field(..., ge=0)

    @property
    def course_fee(self) -> int:
        return self.course.base_fee

    @property
    def total_pre_tax(self) -> int:
        return self.course_fee + self.extension_fee_total

    @property
    def night_block_count(self) -> int:
        return sum(1 for block in self.blocks if block.is_night)

    def total_with_tax(self, rate: Optional[RateLike] = None) -> int:
        return apply_tax(self.total_pre_tax, rate)

    def duration_at_facility(self) -> timedelta:
        # 표시용 실제 이용 시간 (올림 없음)
        return self.exit_time.astimezone(timezone.utc) - self.entry_time.astimezone(timezone.utc)

    def extension_block_count(self) -> int:
        return self.extension.duration // self.extension.block_length

    def extension_minutes(self) -> int:
        return self.extension.minutes

    def to_summary(self, rate: Optional[RateLike] = None) -> BillSummary:
        tax_rate = TAX_RATE if rate is None else Decimal(str(rate))
        return BillSummary(
            course=self.course.identifier.value,
            entry_time=self.entry_time,
            exit_time=self.exit_time,
            duration_seconds=int(self.duration_at_facility().total_seconds()),
            extension_minutes=self.extension_minutes(),
            extension_block_count=self.extension_block_count(),
            night_block_count=self.night_block_count,
            course_fee=self.course_fee,
            extension_fee_total=self.extension_fee_total,
            total_pre_tax=self.total_pre_tax,
            tax_rate=float(tax_rate),
            total_with_tax=self.total_with_tax(tax_rate),
        )
