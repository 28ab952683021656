"""
은행 피드 수집

BasePoller: 공통 폴링 로직 (동시 실행 방지, 마지막 폴링 시간 관리)
StatementPoller: 명세서 조회 → Ledger import
"""

from feed.base import BasePoller
from feed.statement_poller import StatementPoller

__all__ = [
    "BasePoller",
    "StatementPoller",
]
