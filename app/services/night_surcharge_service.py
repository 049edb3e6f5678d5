"""
심야 할증 집계 서비스 (NightSurchargeAggregator)

역할:
    - 연장 구간을 블록 단위로 나누고, 각 블록이 심야 시간대(22:00 이상 ~ 05:00 미만)와
      겹치는지 판정
    - 심야 블록은 night_rate, 그 외에는 standard_rate로 과금 후 합산

Rationale:
    [심야 판정 단위]
    -> 블록 시작 시각부터 1분 간격으로 샘플링한 시각 중 하나라도 심야 시간대에 들어가면
       블록 전체를 심야 요금으로 계산합니다. (1분이라도 심야면 할증)
       샘플은 고객이 실제로 머문 구간 [블록 시작, min(블록 끝, 퇴점)) 안에서만 취합니다.
    -> 분 단위 루프 대신 '첫 샘플 ~ 마지막 샘플' 닫힌 구간과 심야 시간대의 교차 여부로
       판정합니다. 심야 시간대 길이가 샘플 간격(1분)보다 길기 때문에 두 방식의 결과는 같습니다.
    -> 서머타임 전환으로 벽시계가 건너뛰거나 되돌아가는 블록은 UTC 오프셋이 같은
       구간별로 나눠서 각각 판정합니다.

    [night_rate 계산]
    -> ceil(standard_rate * 1.15)를 Decimal로 계산합니다. (100 -> 115)
       float 곱셈은 114.99999... 처럼 오차가 생길 수 있습니다.

실행: pytest tests/services/test_night_surcharge_service.py -v
"""

import logging
import math
from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator

from app.core.config import (
    EXTENSION_BASE_FEE,
    NIGHT_ENDS_AT,
    NIGHT_FEE_MULTIPLIER,
    NIGHT_STARTS_AT,
)
from app.models.bill import ExtensionBlock, ExtensionPeriod
from app.utils.time_utils import to_utc, wall_clock_spans

logger = logging.getLogger("app")

SAMPLE_INTERVAL = timedelta(minutes=1)


class NightWindow(BaseModel):
    """심야 시간대 (start 이상 ~ end 미만, end <= start 이면 자정을 넘어 wrap)"""
    model_config = ConfigDict(frozen=True)

    start: time = NIGHT_STARTS_AT
    end: time = NIGHT_ENDS_AT

    @model_validator(mode="after")
    def validate_bounds(self):
        if self.start == self.end:
            raise ValueError("night window start and end must differ")
        return self

    @property
    def wraps(self) -> bool:
        return self.end <= self.start

    def contains(self, moment: time) -> bool:
        if self.wraps:
            return moment >= self.start or moment < self.end
        return self.start <= moment < self.end

    def overlaps(self, first: datetime, last: datetime) -> bool:
        """
        Check whether the closed wall-clock span [first, last] touches the window.

        Both datetimes are read as local wall-clock values (tzinfo ignored).
        Every daily occurrence of the window that could intersect the span is tested.
        """
        first = first.replace(tzinfo=None)
        last = last.replace(tzinfo=None)

        day = first.date() - timedelta(days=1)
        while day <= last.date():
            lo = datetime.combine(day, self.start)
            hi = datetime.combine(day + timedelta(days=1) if self.wraps else day, self.end)
            if first < hi and last >= lo:
                return True
            day += timedelta(days=1)
        return False


class SurchargeResult(BaseModel):
    """블록별 과금 결과와 연장 요금 합계"""
    model_config = ConfigDict(frozen=True)

    blocks: Tuple[ExtensionBlock, ...] = ()
    extension_fee_total: int = 0

    @property
    def night_block_count(self) -> int:
        return sum(1 for block in self.blocks if block.is_night)

    @property
    def standard_block_count(self) -> int:
        return len(self.blocks) - self.night_block_count


def calc_night_rate(standard_rate: int, multiplier: Decimal) -> int:
    """할증 단가. 반올림이 아닌 올림이므로 과소 청구가 발생하지 않습니다."""
    return math.ceil(Decimal(standard_rate) * Decimal(str(multiplier)))


class NightSurchargeAggregator:
    """연장 블록별 심야 할증 판정 및 연장 요금 합산"""

    def __init__(
        self,
        standard_rate: Optional[int] = None,
        night_multiplier: Optional[Decimal] = None,
        window: Optional[NightWindow] = None,
    ):
        self.standard_rate = EXTENSION_BASE_FEE if standard_rate is None else standard_rate
        if self.standard_rate < 0:
            raise ValueError("standard_rate must not be negative")
        multiplier = NIGHT_FEE_MULTIPLIER if night_multiplier is None else night_multiplier
        self.night_rate = calc_night_rate(self.standard_rate, multiplier)
        self.window = window or NightWindow()

    def aggregate(self, period: ExtensionPeriod) -> SurchargeResult:
        """
        Price every extension block of the period and sum the fees.

        Returns:
            SurchargeResult: The priced blocks in order and `extension_fee_total`
            (0 when the period has no blocks).
        """
        blocks = self.build_blocks(period)
        return SurchargeResult(
            blocks=tuple(blocks),
            extension_fee_total=sum(block.fee for block in blocks),
        )

    def build_blocks(self, period: ExtensionPeriod) -> List[ExtensionBlock]:
        tz = period.starts_at.tzinfo
        start_utc = to_utc(period.starts_at)

        blocks = []
        for index in range(period.block_count):
            block_start = start_utc + period.block_length * index
            block_end = block_start + period.block_length
            is_night = self.is_night_block(block_start, block_end, period.ends_at, tz)
            block = ExtensionBlock(
                index=index,
                starts_at=block_start.astimezone(tz),
                ends_at=block_end.astimezone(tz),
                is_night=is_night,
                fee=self.price_block(is_night),
            )
            logger.debug({
                "message": "extension block priced",
                "index": index,
                "starts_at": block.starts_at.isoformat(),
                "is_night": is_night,
                "fee": block.fee,
            })
            blocks.append(block)
        return blocks

    def is_night_block(self, block_start: datetime, block_end: datetime, exit_time: datetime, tz) -> bool:
        occupied_end = min(to_utc(block_end), to_utc(exit_time))
        occupied = occupied_end - to_utc(block_start)
        if occupied <= timedelta(0):
            return False

        samples, remainder = divmod(occupied, SAMPLE_INTERVAL)
        if remainder:
            samples += 1
        return any(
            self.window.overlaps(first, last)
            for first, last in wall_clock_spans(block_start, SAMPLE_INTERVAL, samples, tz)
        )

    def price_block(self, is_night: bool) -> int:
        return self.night_rate if is_night else self.standard_rate
