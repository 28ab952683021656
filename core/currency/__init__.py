"""
통화 모듈

통화 카탈로그, 기준 통화 설정, 기록 기반 환율 추정
"""

from core.currency.catalog import (
    DEFAULT_CURRENCIES,
    CurrencyCatalog,
    CurrencyConfig,
    CurrencyInfo,
)
from core.currency.manager import CurrencyManager

__all__ = [
    "DEFAULT_CURRENCIES",
    "CurrencyCatalog",
    "CurrencyConfig",
    "CurrencyInfo",
    "CurrencyManager",
]
