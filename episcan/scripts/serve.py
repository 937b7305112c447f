"""EpiScan API 서버 실행

사용법:
    python -m episcan.scripts.serve
    python -m episcan.scripts.serve --host 0.0.0.0 --port 8080 --reload
"""

import argparse

import uvicorn

from episcan.config import settings

APP = "episcan.api.main:app"


def main():
    parser = argparse.ArgumentParser(description="EpiScan API 서버")
    parser.add_argument("--host", default=settings.API_HOST, help="바인드 주소")
    parser.add_argument("--port", type=int, default=settings.API_PORT, help="포트")
    parser.add_argument("--reload", action="store_true", help="코드 변경 시 자동 재시작")
    args = parser.parse_args()

    uvicorn.run(
        APP,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
