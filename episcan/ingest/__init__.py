"""데이터 수집 모듈"""

from .base import BaseClient
from .cms import CMSClient
from .external import (
    ExternalSignalsClient,
    FDA_ADVERSE_FIXTURE,
    CLINICAL_TRIALS_FIXTURE,
    USPTO_FIXTURE,
)
from .local import (
    DataSource,
    SourceKind,
    LocalFileLoader,
    LOCAL_SOURCES,
    parse_delimited,
    make_headers,
    rows_from_grid,
)
from .log_sink import ContentLogSink, FileLogSink, MemoryLogSink, NullLogSink

__all__ = [
    "BaseClient",
    # CMS
    "CMSClient",
    # 외부 시그널
    "ExternalSignalsClient",
    "FDA_ADVERSE_FIXTURE",
    "CLINICAL_TRIALS_FIXTURE",
    "USPTO_FIXTURE",
    # 로컬 파일
    "DataSource",
    "SourceKind",
    "LocalFileLoader",
    "LOCAL_SOURCES",
    "parse_delimited",
    "make_headers",
    "rows_from_grid",
    # 로그 싱크
    "ContentLogSink",
    "FileLogSink",
    "MemoryLogSink",
    "NullLogSink",
]
