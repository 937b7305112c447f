"""로컬 파일 로더 테스트"""

import json

import pandas as pd
import pytest

from episcan.ingest.local import (
    LOCAL_SOURCES,
    DataSource,
    LocalFileLoader,
    SourceKind,
    make_headers,
    parse_delimited,
    rows_from_grid,
)
from episcan.ingest.log_sink import LOG_HEADER, FileLogSink, MemoryLogSink


class TestDataSource:
    """파일 정의"""

    def test_delimiter_by_filename(self):
        assert DataSource("a", "Underlying Cause of Death, 2018-2023.txt", SourceKind.CSV).delimiter == "\t"
        assert DataSource("b", "WHOMortalityDatabase_Deaths.csv", SourceKind.CSV).delimiter == "\t"
        assert DataSource("c", "data.csv", SourceKind.CSV).delimiter == ","

    def test_sheet_override(self):
        source = DataSource("x", "FSNationalTrendsInpatientStays-dy21.xlsx", SourceKind.EXCEL)
        assert source.sheet_name == "Trends in Inpatient Stays"
        assert DataSource("y", "RCDCFundingSummary.xlsx", SourceKind.EXCEL).sheet_name is None

    def test_registered_sources(self):
        keys = [s.key for s in LOCAL_SOURCES]
        assert len(keys) == len(set(keys))
        assert {"who_deaths", "cdc_underlying_cause", "nih_funding", "open_payments", "cms_inpatient"} <= set(keys)


class TestParsing:
    """헤더/구분자 파싱"""

    def test_make_headers_duplicates_and_empty(self):
        headers = make_headers(["Name", "Value", "Value", None, "", "Value", 2020.0])
        assert headers == ["Name", "Value", "Value_1", "__EMPTY", "__EMPTY_1", "Value_2", "2020"]

    def test_make_headers_suffix_collision(self):
        """접미어 이름이 실제 헤더와 겹치면 다음 번호 사용"""
        assert make_headers(["A", "A", "A_1"]) == ["A", "A_1", "A_1_1"]
        assert make_headers(["B_1", "B", "B"]) == ["B_1", "B", "B_2"]

    def test_rows_from_grid_skips_blank(self):
        grid = [
            ["Category", "Amount"],
            ["Epilepsy", 240],
            [None, None],
            ["Stroke", None],
        ]
        assert rows_from_grid(grid) == [
            {"Category": "Epilepsy", "Amount": 240},
            {"Category": "Stroke"},
        ]
        assert rows_from_grid([]) == []

    def test_parse_delimited_trims_and_skips(self):
        raw = (
            " Year , Deaths \n"
            "2020, 10 \n"
            "\n"
            "2021,20,extra\n"
            "2022,30\n"
        )
        assert parse_delimited(raw) == [
            {"Year": "2020", "Deaths": "10"},
            {"Year": "2022", "Deaths": "30"},
        ]

    def test_parse_delimited_quoted(self):
        raw = 'Company,Amount\n"Medtronic, Inc.",12.5\n'
        assert parse_delimited(raw) == [{"Company": "Medtronic, Inc.", "Amount": "12.5"}]

    def test_parse_tab(self):
        raw = "Year\tNumber\n2022\t100\n"
        assert parse_delimited(raw, delimiter="\t") == [{"Year": "2022", "Number": "100"}]


class TestLocalFileLoader:
    """파일 로드"""

    @pytest.mark.asyncio
    async def test_load_csv_and_log_sample(self, tmp_path):
        """CSV 로드 + 처음 3줄 로그"""
        (tmp_path / "data.csv").write_text(
            "Name,Amount\nMedtronic,1\nLivaNova,2\nAbbott,3\n", encoding="utf-8"
        )
        sink = MemoryLogSink()
        loader = LocalFileLoader(data_dir=tmp_path, sink=sink)

        rows = await loader.load(DataSource("open_payments", "data.csv", SourceKind.CSV))

        assert len(rows) == 3
        assert rows[0] == {"Name": "Medtronic", "Amount": "1"}
        assert sink.messages == [
            "File: data.csv\nFirst 3 lines:\nName,Amount\nMedtronic,1\nLivaNova,2\n---"
        ]

    @pytest.mark.asyncio
    async def test_load_utf8_bom(self, tmp_path):
        """BOM이 있어도 첫 헤더가 깨지지 않음"""
        (tmp_path / "data.csv").write_text("\ufeffYear,Value\n2020,1\n", encoding="utf-8")
        loader = LocalFileLoader(data_dir=tmp_path)

        rows = await loader.load(DataSource("x", "data.csv", SourceKind.CSV))

        assert rows == [{"Year": "2020", "Value": "1"}]

    @pytest.mark.asyncio
    async def test_load_tab_delimited(self, tmp_path):
        filename = "WHOMortalityDatabase_Deaths.csv"
        (tmp_path / filename).write_text("Year\tAge Group\tNumber\n2022\t[All]\t100\n", encoding="utf-8")
        loader = LocalFileLoader(data_dir=tmp_path)

        rows = await loader.load(DataSource("who_deaths", filename, SourceKind.CSV))

        assert rows == [{"Year": "2022", "Age Group": "[All]", "Number": "100"}]

    @pytest.mark.asyncio
    async def test_load_invalid_utf8_keeps_rows(self, tmp_path):
        """잘못된 바이트는 대체 문자로 바꾸고 나머지 행은 유지"""
        filename = "WHOMortalityDatabase_Deaths.csv"
        (tmp_path / filename).write_bytes(
            b"Country\tYear\tAge Group\tNumber\n"
            b"C\xf4te d'Ivoire\t2022\t[All]\t100\n"
            b"France\t2022\t[All]\t250\n"
        )
        loader = LocalFileLoader(data_dir=tmp_path)

        rows = await loader.load(DataSource("who_deaths", filename, SourceKind.CSV))

        assert len(rows) == 2
        assert rows[0]["Country"] == "C\ufffdte d'Ivoire"
        assert rows[0]["Number"] == "100"
        assert rows[1] == {"Country": "France", "Year": "2022", "Age Group": "[All]", "Number": "250"}

    @pytest.mark.asyncio
    async def test_load_json(self, tmp_path):
        (tmp_path / "items.json").write_text(json.dumps({"a": [1, 2]}), encoding="utf-8")
        loader = LocalFileLoader(data_dir=tmp_path)

        assert await loader.load(DataSource("items", "items.json", SourceKind.JSON)) == {"a": [1, 2]}

    @pytest.mark.asyncio
    async def test_load_excel_first_sheet(self, tmp_path):
        """첫 시트, 첫 행 헤더"""
        path = tmp_path / "funding.xlsx"
        pd.DataFrame(
            [["Category", "Amount", "Amount"], ["Epilepsy", "240", "250"], ["Stroke", "10", None]]
        ).to_excel(path, header=False, index=False)
        sink = MemoryLogSink()
        loader = LocalFileLoader(data_dir=tmp_path, sink=sink)

        rows = await loader.load(DataSource("nih", "funding.xlsx", SourceKind.EXCEL))

        assert rows == [
            {"Category": "Epilepsy", "Amount": "240", "Amount_1": "250"},
            {"Category": "Stroke", "Amount": "10"},
        ]
        assert sink.messages[0].startswith("File: funding.xlsx\nFirst 3 rows (Excel):\n")
        assert '"Category": "Epilepsy"' in sink.messages[0]

    @pytest.mark.asyncio
    async def test_load_excel_named_sheet(self, tmp_path):
        """입원 추세 파일은 지정 시트 사용"""
        filename = "FSNationalTrendsInpatientStays-test.xlsx"
        with pd.ExcelWriter(tmp_path / filename) as writer:
            pd.DataFrame([["Notes"], ["cover page"]]).to_excel(
                writer, sheet_name="Summary", header=False, index=False
            )
            pd.DataFrame([["Diagnosis", "Cost"], ["Epilepsy (G40)", "1000"]]).to_excel(
                writer, sheet_name="Trends in Inpatient Stays", header=False, index=False
            )
        loader = LocalFileLoader(data_dir=tmp_path)

        rows = await loader.load(DataSource("cms_inpatient", filename, SourceKind.EXCEL))

        assert rows == [{"Diagnosis": "Epilepsy (G40)", "Cost": "1000"}]

    @pytest.mark.asyncio
    async def test_missing_file_returns_empty(self, tmp_path):
        """파일이 없으면 빈 목록, 로그 없음"""
        sink = MemoryLogSink()
        loader = LocalFileLoader(data_dir=tmp_path, sink=sink)

        assert await loader.load(DataSource("x", "missing.csv", SourceKind.CSV)) == []
        assert await loader.load(DataSource("y", "missing.xlsx", SourceKind.EXCEL)) == []
        assert sink.messages == []

    @pytest.mark.asyncio
    async def test_load_all_isolates_failures(self, tmp_path):
        """한 파일 실패가 다른 파일에 영향 없음"""
        (tmp_path / "ok.csv").write_text("A\n1\n", encoding="utf-8")
        (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
        loader = LocalFileLoader(data_dir=tmp_path)

        result = await loader.load_all([
            DataSource("ok", "ok.csv", SourceKind.CSV),
            DataSource("bad", "bad.json", SourceKind.JSON),
            DataSource("missing", "missing.csv", SourceKind.CSV),
        ])

        assert result == {"ok": [{"A": "1"}], "bad": [], "missing": []}


class TestLogSink:
    """파일 내용 로그"""

    def test_file_sink_reset_and_append(self, tmp_path):
        path = tmp_path / "logs" / "fileContentsLog.txt"
        sink = FileLogSink(path)

        sink.reset()
        sink.append("File: a.csv\n---")
        sink.append("File: b.csv\n---")

        assert path.read_text(encoding="utf-8") == LOG_HEADER + "File: a.csv\n---\nFile: b.csv\n---\n"

        sink.reset()
        assert path.read_text(encoding="utf-8") == LOG_HEADER

    def test_file_sink_write_failure_is_ignored(self, tmp_path):
        """디렉토리 경로에 쓰기 실패해도 예외 없음"""
        sink = FileLogSink(tmp_path)
        sink.reset()
        sink.append("ignored")

    def test_memory_sink(self):
        sink = MemoryLogSink()
        sink.append("one")
        sink.reset()
        sink.append("two")

        assert sink.messages == ["two"]
        assert sink.reset_count == 1
        assert sink.text == LOG_HEADER + "two\n"
