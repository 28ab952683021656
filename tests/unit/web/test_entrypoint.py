"""
python -m web 인자 파싱 테스트
"""

from core.constants import Defaults
from web.__main__ import parse_args


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_args([])

        assert args.host == Defaults.WEB_HOST
        assert args.port == Defaults.WEB_PORT
        assert args.reload is False

    def test_overrides(self) -> None:
        args = parse_args(["--host", "0.0.0.0", "--port", "8080", "--reload"])

        assert (args.host, args.port, args.reload) == ("0.0.0.0", 8080, True)
