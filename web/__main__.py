"""
Web 진입점 (MonthBudget API)

실행 방법:
    python -m web
    python -m web --port 8080
"""

import argparse

import uvicorn

from core.constants import Defaults


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="MonthBudget API 서버")
    parser.add_argument("--host", default=Defaults.WEB_HOST, help="바인드 주소")
    parser.add_argument("--port", type=int, default=Defaults.WEB_PORT, help="포트")
    parser.add_argument("--reload", action="store_true", help="코드 변경 시 자동 재시작 (개발용)")
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    uvicorn.run(
        "web.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
