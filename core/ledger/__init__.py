"""
이중 통화 Ledger

거래 기록, 환율 추정 기반 집계, 카테고리 관리, 은행 명세서 import.

사용 예시:
```python
from core.ledger import LedgerAggregator, TransactionService

service = TransactionService(store, currency_manager, registry.labels)
result = await service.create("1000", category="Food")

aggregator = LedgerAggregator(currency_manager)
expenses = aggregator.total_expenses(await store.all(), "PLN")
```
"""

from core.ledger.aggregator import BudgetSummary, CategorySummary, LedgerAggregator
from core.ledger.categories import CategoryRegistry
from core.ledger.importer import ImportResult, StatementImporter
from core.ledger.service import TransactionService, parse_amount
from core.ledger.types import ZERO, Category, MutationResult, Transaction

__all__ = [
    # 핵심 클래스
    "LedgerAggregator",
    "TransactionService",
    "CategoryRegistry",
    "StatementImporter",
    # 데이터 구조
    "Transaction",
    "Category",
    "MutationResult",
    "ImportResult",
    "BudgetSummary",
    "CategorySummary",
    # 헬퍼
    "parse_amount",
    "ZERO",
]
