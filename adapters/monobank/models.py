"""
Monobank API 응답 모델

Monobank Open API 응답(JSON)을 데이터클래스로 변환.
금액은 최소 단위(코페이카) 정수 그대로 보관하며 변환은 import 단계에서 수행.
"""

from dataclasses import dataclass, field
from typing import Any


def _require_int(data: dict[str, Any], key: str) -> int:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"'{key}' must be an integer, got {type(value).__name__}")
    return int(value)


@dataclass(frozen=True)
class StatementItem:
    """명세서 항목 (GET /personal/statement/{account}/{from}/{to})

    응답 예시:
    {
        "id": "ZuHWzqkKGVo=",
        "time": 1554466347,
        "description": "Покупка щастя",
        "mcc": 7997,
        "amount": -95000,
        "operationAmount": -95000,
        "currencyCode": 980,
        "balance": 10050000
    }

    Attributes:
        id: 외부 거래 ID
        time: Unix 타임스탬프 (초)
        description: 거래 설명
        amount: 계좌 통화 금액 (최소 단위, 출금은 음수)
        operation_amount: 거래 통화 금액 (최소 단위)
        currency_code: ISO 4217 숫자 코드
        balance: 거래 후 잔고 (최소 단위)
        category: MCC 코드
    """

    id: str
    time: int
    description: str
    amount: int
    operation_amount: int
    currency_code: int = 0
    balance: int = 0
    category: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "StatementItem":
        """API 응답에서 생성

        Raises:
            KeyError: 필수 키(id, time, amount) 없음
            TypeError/ValueError: 값 형식 오류
        """
        item_id = data["id"]
        if not isinstance(item_id, str) or not item_id:
            raise ValueError("statement item 'id' must be a non-empty string")

        amount = _require_int(data, "amount")
        return cls(
            id=item_id,
            time=_require_int(data, "time"),
            description=str(data.get("description") or ""),
            amount=amount,
            operation_amount=int(data.get("operationAmount", amount)),
            currency_code=int(data.get("currencyCode", 0)),
            balance=int(data.get("balance", 0)),
            category=int(data.get("mcc", 0)),
        )


@dataclass(frozen=True)
class MonobankAccount:
    """계좌 정보

    Attributes:
        id: 계좌 ID (명세서 조회 시 사용, "0"은 기본 계좌)
        currency_code: ISO 4217 숫자 코드
        balance: 잔고 (최소 단위)
        type: 카드 종류 (black, white, ...)
    """

    id: str
    currency_code: int
    balance: int = 0
    type: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "MonobankAccount":
        """API 응답에서 생성"""
        return cls(
            id=data["id"],
            currency_code=int(data["currencyCode"]),
            balance=int(data.get("balance", 0)),
            type=data.get("type", ""),
        )


@dataclass(frozen=True)
class ClientInfo:
    """고객 정보 (GET /personal/client-info)

    Attributes:
        client_id: 고객 ID
        name: 고객 이름
        accounts: 계좌 목록
    """

    client_id: str
    name: str
    accounts: tuple[MonobankAccount, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ClientInfo":
        """API 응답에서 생성"""
        return cls(
            client_id=data.get("clientId", ""),
            name=data.get("name", ""),
            accounts=tuple(MonobankAccount.from_api(a) for a in data.get("accounts", [])),
        )
