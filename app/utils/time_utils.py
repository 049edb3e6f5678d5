"""
시각 변환 유틸

Rationale:
    같은 tzinfo 객체를 공유하는 aware datetime끼리의 비교/뺄셈은 벽시계 값으로 계산되고
    fold(서머타임 해제로 반복되는 시각 구분)를 무시합니다.
    실제 순서나 경과 시간이 필요한 곳에서는 항상 UTC로 바꾼 뒤 비교합니다.
"""

from bisect import bisect_left
from datetime import datetime, timedelta, timezone, tzinfo
from typing import List, Tuple


def to_utc(instant: datetime) -> datetime:
    return instant.astimezone(timezone.utc)


def wall_clock_spans(
    first: datetime,
    step: timedelta,
    count: int,
    tz: tzinfo,
) -> List[Tuple[datetime, datetime]]:
    """
    Split `count` instants spaced by `step` from `first` into runs sharing one UTC offset in `tz`.

    Inside a run the local wall clock only moves forward, so each run is returned as the
    (first, last) local datetimes of its instants. A run boundary is a DST transition.
    """
    start_utc = to_utc(first)

    def local(index: int) -> datetime:
        return (start_utc + step * index).astimezone(tz)

    spans = []
    start = 0
    while start < count:
        offset = local(start).utcoffset()
        # 구간 안에서 오프셋은 최대 한 번 바뀐다고 가정 (이진 탐색)
        end = start + bisect_left(
            range(start, count), True, key=lambda index: local(index).utcoffset() != offset
        )
        spans.append((local(start), local(end - 1)))
        start = end
    return spans
