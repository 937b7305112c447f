"""뇌전증 시장 개요 생성 스크립트

사용법:
    python -m episcan.scripts.build_overview
    python -m episcan.scripts.build_overview --data-dir data --output output/overview.json
    python -m episcan.scripts.build_overview --live
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path

from episcan.config import settings
from episcan.ingest.log_sink import FileLogSink
from episcan.scan.market_overview import build_market_overview

# 로깅 설정
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def run(data_dir: Path, output: Path | None, live: bool, log_file: Path) -> dict:
    """시장 개요 생성 후 JSON 저장 (output 미지정 시 stdout)"""
    summary = await build_market_overview(
        data_dir=data_dir,
        sink=FileLogSink(log_file),
        live=live,
    )
    result = summary.to_json_dict()
    text = json.dumps(result, ensure_ascii=False, indent=2)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        logger.info(f"저장 완료: {output}")
    else:
        print(text)
    return result


def main():
    parser = argparse.ArgumentParser(description="뇌전증 시장 개요 생성")
    parser.add_argument("--data-dir", type=Path, default=settings.DATA_DIR, help="입력 파일 디렉토리")
    parser.add_argument("--output", "-o", type=Path, default=None, help="출력 JSON 경로")
    parser.add_argument("--log-file", type=Path, default=settings.CONTENT_LOG_FILE, help="파일 내용 로그 경로")
    parser.add_argument("--live", action="store_true", help="openFDA/CT.gov/USPTO 실제 호출")
    args = parser.parse_args()

    asyncio.run(run(args.data_dir, args.output, args.live or settings.USE_LIVE_EXTERNAL_APIS, args.log_file))


if __name__ == "__main__":
    main()
