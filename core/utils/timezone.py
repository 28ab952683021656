"""
타임존 유틸리티

내부 저장: UTC 원칙 준수를 위한 헬퍼 함수
"""

from datetime import datetime, timezone


def ensure_utc(dt: datetime) -> datetime:
    """datetime을 UTC로 정규화

    Args:
        dt: datetime 객체 (naive면 UTC로 간주)

    Returns:
        UTC 타임존의 datetime
    """
    if dt.tzinfo is None:
        # naive datetime은 UTC로 간주
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    datetime.now(timezone.utc)의 축약형.
    """
    return datetime.now(timezone.utc)


def utc_from_timestamp(ts: int | float) -> datetime:
    """초 단위 Unix 타임스탬프를 UTC datetime으로 변환

    Example:
        >>> utc_from_timestamp(1708444800)
        datetime(2024, 2, 20, 16, 0, 0, tzinfo=timezone.utc)
    """
    return datetime.fromtimestamp(ts, tz=timezone.utc)


def to_timestamp(dt: datetime) -> int:
    """datetime을 초 단위 Unix 타임스탬프로 변환"""
    return int(ensure_utc(dt).timestamp())


def start_of_month(dt: datetime) -> datetime:
    """해당 월의 시작 시각 (UTC 00:00:00)

    Example:
        >>> start_of_month(datetime(2026, 2, 20, 16, 30, tzinfo=timezone.utc))
        datetime(2026, 2, 1, 0, 0, tzinfo=timezone.utc)
    """
    dt = ensure_utc(dt)
    return dt.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def parse_iso(value: str) -> datetime:
    """ISO 문자열을 UTC datetime으로 변환 (DB 저장값 복원용)"""
    return ensure_utc(datetime.fromisoformat(value))
