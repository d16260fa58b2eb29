"""
Tests for Logging Configuration
"""

import logging

import pytest

from kuroe.logging_config import KuroeFormatter, ProgramLogger, setup_logging
from kuroe.verification import LineChecker, PrefixValidator, ProgramRunner


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("kuroe.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestKuroeFormatter:
    """Tests for KuroeFormatter"""

    @pytest.fixture
    def formatter(self):
        return KuroeFormatter(use_colors=False)

    def test_plain_record(self, formatter):
        line = formatter.format(make_record())
        assert line.endswith("INFO     [kuroe.test] hello world")

    def test_program_and_stream_tags(self, formatter):
        line = formatter.format(make_record(program="lines", stream="output:case.out"))
        assert "[kuroe.test] <lines output:case.out> hello world" in line


class TestRunContext:
    """Records emitted during runs carry their context"""

    def test_runner_tags_program(self, tmp_path, caplog):
        path = tmp_path / "case.in"
        path.write_bytes(b"example\n")
        caplog.set_level(logging.INFO, logger="kuroe")

        ProgramRunner().validate(PrefixValidator(), path)

        programs = {getattr(r, "program", None) for r in caplog.records if r.name.endswith("runner")}
        assert programs == {"prefix"}

    def test_stream_failure_tags_stream(self, tmp_path, caplog):
        paths = []
        for name, text in (("case.in", "example\n"), ("case.out", ""), ("case.ans", "42\n")):
            (tmp_path / name).write_bytes(text.encode("utf-8"))
            paths.append(tmp_path / name)
        caplog.set_level(logging.DEBUG, logger="kuroe")

        ProgramRunner().check(LineChecker(), *paths)

        streams = [getattr(r, "stream", None) for r in caplog.records]
        assert f"output:{paths[1]}" in streams

    def test_explicit_extra_is_kept(self, caplog):
        caplog.set_level(logging.INFO, logger="kuroe")
        ProgramLogger(logging.getLogger("kuroe.test"), "floats").info("x", extra={"stream": "answer:a"})
        record = caplog.records[-1]
        assert (record.program, record.stream) == ("floats", "answer:a")


class TestSetupLogging:
    """Tests for setup_logging"""

    def test_log_file_gets_context(self, tmp_path):
        log_file = tmp_path / "logs" / "kuroe.log"
        setup_logging(level="INFO", log_file=str(log_file))

        case = tmp_path / "case.in"
        case.write_bytes(b"example\n")
        ProgramRunner().validate(PrefixValidator(), case)

        for handler in logging.getLogger("kuroe").handlers:
            handler.flush()
        assert "<prefix> Starting prefix" in log_file.read_text()
