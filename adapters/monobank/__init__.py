"""
Monobank 어댑터 패키지

은행 명세서 import를 위한 Monobank Open API 클라이언트 제공.
"""

from adapters.monobank.rest_client import MonobankApiError, MonobankRestClient
from adapters.monobank.models import ClientInfo, MonobankAccount, StatementItem

__all__ = [
    "MonobankRestClient",
    "MonobankApiError",
    "StatementItem",
    "MonobankAccount",
    "ClientInfo",
]
