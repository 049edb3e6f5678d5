from datetime import datetime
from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

from app.utils.time_utils import to_utc

# Request DTO
class BillingRequest(BaseModel):
    """정산 요청 (코스 + 입점/퇴점 시각)

    Rationale:
        시각은 반드시 타임존 정보를 포함해야 합니다. 심야 여부를 입점 시각의
        현지 벽시계 기준으로 판정하기 때문입니다.
        퇴점 시각 == 입점 시각(이용 시간 0)은 유효한 요청입니다.
    """
    model_config = ConfigDict(frozen=True)

    course: str = Field(..., description="Course identifier (e.g. 'standard', '3-hour pack')")
    entry_time: AwareDatetime = Field(..., description="Entry instant (timezone-aware)")
    exit_time: AwareDatetime = Field(..., description="Exit instant (timezone-aware)")

    @model_validator(mode="after")
    def validate_period(self):
        """
        Ensure `exit_time` is not earlier than `entry_time`.

        Raises:
            ValueError: If `exit_time` precedes `entry_time`.
        """
        if to_utc(self.exit_time) < to_utc(self.entry_time):
            raise ValueError("exit_time must not be earlier than entry_time")
        return self


# Response DTO
class BillSummary(BaseModel):
    """표시 계층(영수증 출력 등)에 넘기는 정산 결과"""
    course: str = Field(..., description="Course identifier")
    entry_time: datetime = Field(..., description="Entry instant")
    exit_time: datetime = Field(..., description="Exit instant")
    duration_seconds: int = Field(..., description="Raw time at facility in seconds (not rounded)")
    extension_minutes: int = Field(..., description="Billed extension minutes (rounded up to whole blocks)")
    extension_block_count: int = Field(..., description="Number of billed extension blocks")
    night_block_count: int = Field(..., description="Blocks billed at the night rate")
    course_fee: int = Field(..., description="Course fee before tax")
    extension_fee_total: int = Field(..., description="Extension fee before tax")
    total_pre_tax: int = Field(..., description="Total before tax")
    tax_rate: float = Field(..., description="Applied tax rate")
    total_with_tax: int = Field(..., description="Total including tax (truncated)")
