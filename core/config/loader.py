"""
설정 로더

secrets.yaml 로드 (Monobank 토큰 등)
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from core.constants import Defaults, Paths


@dataclass(frozen=True)
class Secrets:
    """보안 설정 (secrets.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    monobank_token: str
    monobank_account: str = Defaults.MONOBANK_ACCOUNT
    fetch_timeout_sec: float = Defaults.FETCH_TIMEOUT_SEC
    db_path: Path = Paths.LEDGER_DB


class SecretsLoadError(Exception):
    """Secrets 로드 실패 예외"""

    pass


def load_secrets(path: Path | None = None) -> Secrets:
    """secrets.yaml 파일 로드

    형식:
    ```yaml
    monobank:
      token: "uXXXX..."
      account: "0"
      timeout_sec: 30
    storage:
      db_path: "data/monthbudget.db"
    ```

    Args:
        path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Secrets 인스턴스

    Raises:
        SecretsLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 타임아웃 값이 유효하지 않은 경우
    """
    if path is None:
        path = Paths.SECRETS_FILE

    if not path.exists():
        raise SecretsLoadError(f"secrets.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SecretsLoadError(f"secrets.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SecretsLoadError("secrets.yaml이 비어 있습니다")

    monobank_config = data.get("monobank")
    if not monobank_config:
        raise SecretsLoadError("secrets.yaml에 'monobank' 설정이 없습니다")

    token = monobank_config.get("token")
    if not token:
        raise SecretsLoadError(
            "secrets.yaml의 monobank 섹션에 'token'이 없습니다"
        )

    account = str(monobank_config.get("account", Defaults.MONOBANK_ACCOUNT))

    timeout_raw = monobank_config.get("timeout_sec", Defaults.FETCH_TIMEOUT_SEC)
    try:
        timeout = float(timeout_raw)
    except (TypeError, ValueError) as e:
        raise ValueError(f"유효하지 않은 timeout_sec입니다: '{timeout_raw}'") from e

    if timeout <= 0:
        raise ValueError(f"timeout_sec는 0보다 커야 합니다: {timeout}")

    # DB 경로 (상대 경로는 프로젝트 루트 기준)
    storage_config = data.get("storage") or {}
    db_path_raw = storage_config.get("db_path")
    db_path = Paths.LEDGER_DB
    if db_path_raw:
        db_path = Path(db_path_raw)
        if not db_path.is_absolute():
            db_path = Paths.CONFIG_DIR.parent / db_path

    return Secrets(
        monobank_token=token,
        monobank_account=account,
        fetch_timeout_sec=timeout,
        db_path=db_path,
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    secrets.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _secrets: Secrets | None = None

    def __new__(cls, secrets_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, secrets_path: Path | None = None) -> None:
        if self._secrets is None:
            self._secrets = load_secrets(secrets_path)

    @property
    def monobank_token(self) -> str:
        """Monobank API 토큰"""
        assert self._secrets is not None
        return self._secrets.monobank_token

    @property
    def monobank_account(self) -> str:
        """Monobank 계좌 ID ("0" = 기본 계좌)"""
        assert self._secrets is not None
        return self._secrets.monobank_account

    @property
    def fetch_timeout_sec(self) -> float:
        """은행 API 요청 타임아웃 (초)"""
        assert self._secrets is not None
        return self._secrets.fetch_timeout_sec

    @property
    def db_path(self) -> Path:
        """Ledger DB 경로"""
        assert self._secrets is not None
        return self._secrets.db_path

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._secrets = None


def get_settings(secrets_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        secrets_path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(secrets_path)
