"""
결정적 ID 생성 유틸리티

은행 API 거래 ID → 내부 거래 ID 변환.
같은 외부 거래는 항상 같은 내부 ID로 매핑되어 재import가 멱등적.
"""

import hashlib
import uuid


def uuid_from_string(value: str) -> str:
    """문자열에서 결정적 UUID 생성

    MD5 다이제스트(16바이트)에 UUID 버전 3 / RFC 4122 variant 비트를 적용.

    Args:
        value: 외부 거래 ID (예: Monobank statement item id)

    Returns:
        UUID 문자열 (36자)

    Example:
        >>> uuid_from_string("ZuHWzqkKGVo=") == uuid_from_string("ZuHWzqkKGVo=")
        True
    """
    if not value:
        raise ValueError("외부 거래 ID는 비어 있을 수 없습니다")

    digest = hashlib.md5(value.encode("utf-8")).digest()
    return str(uuid.UUID(bytes=digest, version=3))


def make_import_id(external_id: str) -> str:
    """은행 import 거래의 내부 ID 생성

    Example:
        >>> make_import_id("ZuHWzqkKGVo=")  # doctest: +SKIP
        'c7d1...'
    """
    return uuid_from_string(external_id)
