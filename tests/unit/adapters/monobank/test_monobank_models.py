"""
Monobank 응답 모델 테스트
"""

import pytest

from adapters.monobank.models import ClientInfo, StatementItem


@pytest.fixture
def statement_response() -> dict:
    """명세서 항목 응답 예시"""
    return {
        "id": "ZuHWzqkKGVo=",
        "time": 1554466347,
        "description": "Покупка щастя",
        "mcc": 7997,
        "amount": -95000,
        "operationAmount": -95000,
        "currencyCode": 980,
        "balance": 10050000,
    }


class TestStatementItem:
    """StatementItem.from_api 테스트"""

    def test_from_api_maps_camel_case(self, statement_response: dict) -> None:
        """camelCase 키 매핑"""
        item = StatementItem.from_api(statement_response)

        assert item.id == "ZuHWzqkKGVo="
        assert item.time == 1554466347
        assert item.description == "Покупка щастя"
        assert item.amount == -95000
        assert item.operation_amount == -95000
        assert item.currency_code == 980
        assert item.balance == 10050000

    def test_mcc_maps_to_category(self, statement_response: dict) -> None:
        """mcc → category"""
        item = StatementItem.from_api(statement_response)

        assert item.category == 7997

    def test_operation_amount_defaults_to_amount(self) -> None:
        """operationAmount 없으면 amount 사용"""
        item = StatementItem.from_api({"id": "a", "time": 1, "amount": 500})

        assert item.operation_amount == 500
        assert item.description == ""

    def test_missing_id_raises(self) -> None:
        """id 없으면 KeyError"""
        with pytest.raises(KeyError):
            StatementItem.from_api({"time": 1, "amount": 100})

    def test_empty_id_raises(self) -> None:
        """빈 id는 ValueError"""
        with pytest.raises(ValueError):
            StatementItem.from_api({"id": "", "time": 1, "amount": 100})

    def test_non_numeric_amount_raises(self) -> None:
        """숫자가 아닌 amount는 ValueError"""
        with pytest.raises(ValueError):
            StatementItem.from_api({"id": "a", "time": 1, "amount": "abc"})

    def test_null_time_raises(self) -> None:
        """time이 null이면 TypeError"""
        with pytest.raises(TypeError):
            StatementItem.from_api({"id": "a", "time": None, "amount": 100})

    def test_frozen(self, statement_response: dict) -> None:
        """불변성 확인"""
        item = StatementItem.from_api(statement_response)

        with pytest.raises(AttributeError):
            item.amount = 0  # type: ignore


class TestClientInfo:
    """ClientInfo.from_api 테스트"""

    def test_from_api(self) -> None:
        info = ClientInfo.from_api({
            "clientId": "3MSaMMtczs",
            "name": "Мазепа Іван",
            "accounts": [
                {"id": "kKGVoZuHWzqVoZuH", "currencyCode": 980, "balance": 10000000, "type": "black"},
            ],
        })

        assert info.name == "Мазепа Іван"
        assert len(info.accounts) == 1
        assert info.accounts[0].currency_code == 980
        assert info.accounts[0].type == "black"
