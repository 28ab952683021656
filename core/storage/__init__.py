"""
스토리지 모듈

Transaction Store, Config Store 등 데이터 저장소 인터페이스 제공
"""

from core.storage.config_store import ConfigStore, init_default_configs
from core.storage.transaction_store import TransactionStore

__all__ = [
    "TransactionStore",
    "ConfigStore",
    "init_default_configs",
]
