"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → monthbudget/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class MonobankEndpoints:
    """Monobank Open API 엔드포인트 (고정값)

    공식 문서: https://api.monobank.ua/docs/
    """

    BASE_URL: str = "https://api.monobank.ua"

    CLIENT_INFO: str = "/personal/client-info"
    # /personal/statement/{account}/{from}/{to}
    STATEMENT: str = "/personal/statement"


class Defaults:
    """기본값 상수"""

    BASE_CURRENCY_1: str = "UAH"
    BASE_CURRENCY_2: str = "PLN"

    MONTHLY_BUDGET: str = "20000"
    INITIAL_BALANCE: str = "24251.67"

    MONOBANK_ACCOUNT: str = "0"
    FETCH_TIMEOUT_SEC: float = 30.0
    POLL_INTERVAL_SEC: int = 60 * 60

    CATEGORY_COLOR: str = "#808080"

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"
    FEED_LOGS_DIR: Path = LOGS_DIR / "feed"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"

    # DB 파일
    LEDGER_DB: Path = DATA_DIR / "monthbudget.db"


class AmountScale:
    """금액 단위 상수"""

    # 은행 API 금액은 최소 단위(코페이카/그로시) 정수
    MINOR_UNITS_PER_MAJOR: int = 100
