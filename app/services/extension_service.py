"""
연장 시간 계산 서비스 (ExtensionCalculator)

역할:
    - 이용 시간(퇴점 - 입점)에서 코스 시간을 뺀 초과분(overage)을 구함
    - 초과분을 연장 블록(기본 10분) 단위로 올림
      1초라도 초과하면 블록 하나가 통째로 부과됩니다. 부분 블록 과금은 없습니다.

Rationale:
    시간 계산은 모두 UTC 절대 시각으로 수행합니다.
    같은 tzinfo를 가진 aware datetime끼리의 뺄셈은 벽시계 차이를 돌려주므로
    서머타임이 있는 타임존에서 이용 시간이 틀어질 수 있기 때문입니다.

실행: pytest tests/services/test_extension_service.py -v
"""

from datetime import datetime, timedelta
from typing import Optional

from app.core.config import EXTENSION_BLOCK_MINUTES
from app.models.bill import ExtensionPeriod
from app.utils.time_utils import to_utc


class ExtensionCalculator:
    """코스 시간 초과분을 연장 블록 수로 환산"""

    def __init__(self, block_length: Optional[timedelta] = None):
        if block_length is None:
            block_length = timedelta(minutes=EXTENSION_BLOCK_MINUTES)
        if block_length <= timedelta(0):
            raise ValueError("block_length must be positive")
        self.block_length = block_length

    def calculate(
        self,
        entry_time: datetime,
        exit_time: datetime,
        base_duration_hours: int,
    ) -> ExtensionPeriod:
        """
        Compute the billable extension period beyond the course duration.

        Parameters:
            entry_time (datetime): Timezone-aware entry instant.
            exit_time (datetime): Timezone-aware exit instant, not earlier than `entry_time`.
            base_duration_hours (int): Hours included in the course.

        Returns:
            ExtensionPeriod: Extension start (entry + course hours, in the entry time zone),
            the exit instant, and the number of whole blocks billed (0 when there is no overage).

        Raises:
            ValueError: If `exit_time` precedes `entry_time`.
        """
        if to_utc(exit_time) < to_utc(entry_time):
            raise ValueError("exit_time must not be earlier than entry_time")

        base_duration = timedelta(hours=base_duration_hours)
        starts_at = (to_utc(entry_time) + base_duration).astimezone(entry_time.tzinfo)

        overage = self.overage(entry_time, exit_time, base_duration)
        return ExtensionPeriod(
            starts_at=starts_at,
            ends_at=exit_time,
            block_length=self.block_length,
            block_count=self.count_blocks(overage),
        )

    def overage(self, entry_time: datetime, exit_time: datetime, base_duration: timedelta) -> timedelta:
        """코스 시간 초과분. 음수/0이면 연장 없음"""
        elapsed = to_utc(exit_time) - to_utc(entry_time)
        return elapsed - base_duration

    def count_blocks(self, overage: timedelta) -> int:
        if overage <= timedelta(0):
            return 0
        # timedelta는 마이크로초 정수 연산이므로 나머지가 1초 미만이어도 정확히 올림됩니다.
        blocks, remainder = divmod(overage, self.block_length)
        if remainder:
            blocks += 1
        return blocks
