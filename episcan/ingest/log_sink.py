"""입력 파일 내용 로그 싱크

각 입력 파일의 처음 몇 행/줄을 사람이 읽을 수 있는 로그로 남긴다.
로더는 싱크를 주입받아 사용하며, 직접 파일에 쓰지 않는다.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

LOG_HEADER = "File Contents Log\n================\n"


class ContentLogSink(ABC):
    """파일 내용 로그 싱크 베이스 클래스"""

    @abstractmethod
    def reset(self) -> None:
        """집계 실행 시작 시 로그 초기화"""
        pass

    @abstractmethod
    def append(self, message: str) -> None:
        """메시지 한 건 추가"""
        pass


class FileLogSink(ContentLogSink):
    """텍스트 파일 싱크 (쓰기 실패는 로깅만 하고 무시)"""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def reset(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(LOG_HEADER, encoding="utf-8")
        except OSError as e:
            logger.error(f"Error resetting log file {self.path}: {e}")

    def append(self, message: str) -> None:
        try:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(message + "\n")
        except OSError as e:
            logger.error(f"Error writing to log file {self.path}: {e}")


class MemoryLogSink(ContentLogSink):
    """메모리 싱크"""

    def __init__(self):
        self.messages: list[str] = []
        self.reset_count = 0

    def reset(self) -> None:
        self.messages = []
        self.reset_count += 1

    def append(self, message: str) -> None:
        self.messages.append(message)

    @property
    def text(self) -> str:
        return LOG_HEADER + "".join(m + "\n" for m in self.messages)


class NullLogSink(ContentLogSink):
    """아무것도 기록하지 않는 싱크"""

    def reset(self) -> None:
        pass

    def append(self, message: str) -> None:
        pass
