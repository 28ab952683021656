"""
통화 카탈로그

알려진 통화 코드와 표시 기호, 그리고 Ledger가 기준으로 삼는
두 개의 기준 통화(base currency) 설정.

다른 컴포넌트는 통화 코드를 하드코딩하지 않고 CurrencyConfig를 통해 조회.
"""

from dataclasses import dataclass, field
from typing import Any

from core.constants import Defaults
from core.errors import LedgerValidationError


@dataclass(frozen=True)
class CurrencyInfo:
    """통화 정보

    Attributes:
        code: ISO 4217 알파벳 코드 (예: UAH)
        symbol: 표시 기호 (예: ₴)
        numeric_code: ISO 4217 숫자 코드 (예: 980)
    """

    code: str
    symbol: str
    numeric_code: int | None = None


# 기본 통화 목록
DEFAULT_CURRENCIES: tuple[CurrencyInfo, ...] = (
    CurrencyInfo(code="UAH", symbol="₴", numeric_code=980),
    CurrencyInfo(code="PLN", symbol="zł", numeric_code=985),
    CurrencyInfo(code="USD", symbol="$", numeric_code=840),
    CurrencyInfo(code="EUR", symbol="€", numeric_code=978),
)


class CurrencyCatalog:
    """통화 레지스트리 (정적)

    Args:
        currencies: 통화 목록 (None이면 기본 목록)

    사용 예시:
    ```python
    catalog = CurrencyCatalog()
    catalog.symbol_for("PLN")   # 'zł'
    catalog.symbol_for("GBP")   # 'GBP' (알 수 없는 코드는 그대로)
    catalog.code_for_numeric(980)  # 'UAH'
    ```
    """

    def __init__(self, currencies: tuple[CurrencyInfo, ...] | None = None):
        self._currencies: dict[str, CurrencyInfo] = {
            info.code: info for info in (currencies or DEFAULT_CURRENCIES)
        }

    def symbol_for(self, code: str) -> str:
        """통화 기호 반환 (모르는 코드면 코드 자체)"""
        info = self._currencies.get(code)
        return info.symbol if info else code

    def known_codes(self) -> set[str]:
        """알려진 통화 코드 집합"""
        return set(self._currencies)

    def is_known(self, code: str) -> bool:
        """알려진 통화인지 확인"""
        return code in self._currencies

    def get(self, code: str) -> CurrencyInfo | None:
        """통화 정보 조회"""
        return self._currencies.get(code)

    def code_for_numeric(self, numeric_code: int) -> str | None:
        """ISO 4217 숫자 코드 → 알파벳 코드 (없으면 None)"""
        for info in self._currencies.values():
            if info.numeric_code == numeric_code:
                return info.code
        return None

    def all(self) -> list[CurrencyInfo]:
        """전체 통화 목록 (코드순)"""
        return [self._currencies[code] for code in sorted(self._currencies)]


@dataclass
class CurrencyConfig:
    """기준 통화 설정

    사용자가 변경 가능. ConfigStore("currency")에서 매 요청마다 생성되어
    CurrencyManager 등에 명시적으로 전달됨 (전역 상태 없음).

    Attributes:
        base_currency_1: 기본 통화 (firstAmount 통화)
        base_currency_2: 보조 통화 (secondAmount 통화)
        catalog: 통화 카탈로그
    """

    base_currency_1: str = Defaults.BASE_CURRENCY_1
    base_currency_2: str = Defaults.BASE_CURRENCY_2
    catalog: CurrencyCatalog = field(default_factory=CurrencyCatalog)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """기준 통화 검증

        Raises:
            LedgerValidationError: 알 수 없는 코드이거나 두 통화가 같은 경우
        """
        for name in ("base_currency_1", "base_currency_2"):
            code = getattr(self, name)
            if not self.catalog.is_known(code):
                raise LedgerValidationError(f"알 수 없는 통화 코드입니다: '{code}'", field=name)

        if self.base_currency_1 == self.base_currency_2:
            raise LedgerValidationError(
                "두 기준 통화는 서로 달라야 합니다",
                field="base_currency_2",
            )

    def to_dict(self) -> dict[str, str]:
        """ConfigStore 저장용 딕셔너리"""
        return {
            "base_currency_1": self.base_currency_1,
            "base_currency_2": self.base_currency_2,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        catalog: CurrencyCatalog | None = None,
    ) -> "CurrencyConfig":
        """ConfigStore 값에서 생성"""
        return cls(
            base_currency_1=data.get("base_currency_1", Defaults.BASE_CURRENCY_1),
            base_currency_2=data.get("base_currency_2", Defaults.BASE_CURRENCY_2),
            catalog=catalog or CurrencyCatalog(),
        )
