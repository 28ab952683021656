"""
유틸리티 패키지

결정적 ID 생성, 타임존 처리 등 공통 유틸리티
"""

from core.utils.dedup import make_import_id, uuid_from_string
from core.utils.timezone import (
    ensure_utc,
    now_utc,
    parse_iso,
    start_of_month,
    to_timestamp,
    utc_from_timestamp,
)

__all__ = [
    "make_import_id",
    "uuid_from_string",
    "ensure_utc",
    "now_utc",
    "parse_iso",
    "start_of_month",
    "to_timestamp",
    "utc_from_timestamp",
]
