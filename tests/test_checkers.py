"""
Tests for the Output Checkers
"""

import pytest

from kuroe.main import KuroeConfig, Verdict
from kuroe.params import Params
from kuroe.verification import (
    FloatChecker,
    FunctionChecker,
    IntegerSequenceChecker,
    LineChecker,
    LinesChecker,
    ProgramRunner,
    TokenChecker,
    YesNoChecker,
    get_checker,
    list_checkers,
)


@pytest.fixture
def check(tmp_path):
    """Run a checker over freshly written input/output/answer files"""
    def run(checker, output, answer, input_text="example 1 2\n", config=None):
        paths = []
        for name, text in (("case.in", input_text), ("case.out", output), ("case.ans", answer)):
            path = tmp_path / name
            path.write_bytes(text.encode("utf-8"))
            paths.append(path)
        return ProgramRunner(config).check(checker, *paths)
    return run


class TestLineChecker:
    """Tests for LineChecker"""

    @pytest.fixture
    def checker(self):
        return LineChecker()

    def test_equal_lines_are_accepted(self, check, checker):
        outcome = check(checker, "42\n", "42\n")
        assert outcome.verdict is Verdict.OK
        assert outcome.exit_code == 0

    def test_different_lines_are_wrong(self, check, checker):
        outcome = check(checker, "41\n", "42\n")
        assert outcome.verdict is Verdict.WRONG_ANSWER
        assert outcome.exit_code == 1
        assert outcome.message == "expected '42', found '41'"

    def test_empty_output_is_wrong(self, check, checker):
        outcome = check(checker, "", "42\n")
        assert outcome.verdict is Verdict.WRONG_ANSWER

    def test_missing_final_newline_is_accepted(self, check, checker):
        assert check(checker, "42", "42\n").passed

    def test_trailing_space_is_a_difference(self, check, checker):
        assert check(checker, "42 \n", "42\n").verdict is Verdict.WRONG_ANSWER

    def test_crlf_output_is_accepted(self, check, checker):
        assert check(checker, "42\r\n", "42\n").passed
        assert check(checker, "42\r", "42\r\n").passed

    def test_empty_answer_is_fail(self, check, checker):
        outcome = check(checker, "42\n", "")
        assert outcome.verdict is Verdict.FAIL
        assert "case.ans" in outcome.message

    def test_extra_output_is_presentation_error(self, check, checker):
        outcome = check(checker, "42\n43\n", "42\n")
        assert outcome.verdict is Verdict.PRESENTATION_ERROR
        assert "Extra information in the output file" in outcome.message

    def test_extra_output_allowed_by_config(self, check, checker):
        config = KuroeConfig(allow_trailing_output=True)
        assert check(checker, "42\n43\n", "42\n", config=config).passed

    def test_trailing_blank_lines_are_ignored(self, check, checker):
        assert check(checker, "42\n\n\n", "42\n").passed

    def test_input_stream_is_not_required(self, check, checker):
        assert check(checker, "42\n", "42\n", input_text="anything at all").passed

    def test_same_files_same_verdict(self, check, checker):
        first = check(checker, "41\n", "42\n")
        second = check(checker, "41\n", "42\n")
        assert (first.verdict, first.message) == (second.verdict, second.message)


class TestLinesChecker:
    """Tests for LinesChecker"""

    def test_all_lines_equal(self, check):
        outcome = check(LinesChecker(), "a\nb\n", "a\nb\n")
        assert outcome.passed
        assert outcome.message == "2 line(s)"

    def test_missing_line(self, check):
        outcome = check(LinesChecker(), "a\n", "a\nb\n")
        assert outcome.verdict is Verdict.WRONG_ANSWER
        assert "output ended before 2nd line" in outcome.message

    def test_trailing_blank_answer_lines_are_optional(self, check):
        outcome = check(LinesChecker(), "a\n", "a\n\n")
        assert outcome.passed
        assert outcome.message == "1 line(s)"

    def test_inner_blank_answer_line_is_required(self, check):
        outcome = check(LinesChecker(), "a\nb\n", "a\n\nb\n")
        assert outcome.verdict is Verdict.WRONG_ANSWER
        assert "2nd line differs" in outcome.message

    def test_different_line(self, check):
        outcome = check(LinesChecker(), "a\nc\n", "a\nb\n")
        assert outcome.verdict is Verdict.WRONG_ANSWER
        assert "2nd line differs" in outcome.message


class TestTokenChecker:
    """Tests for TokenChecker"""

    def test_whitespace_is_ignored(self, check):
        outcome = check(TokenChecker(), "1  2\n3", "1 2 3\n")
        assert outcome.passed
        assert outcome.message == "3 token(s)"

    def test_too_few_tokens(self, check):
        outcome = check(TokenChecker(), "1 2", "1 2 3")
        assert outcome.verdict is Verdict.WRONG_ANSWER
        assert "more tokens than output" in outcome.message

    def test_too_many_tokens(self, check):
        outcome = check(TokenChecker(), "1 2 3 4", "1 2 3")
        assert outcome.verdict is Verdict.PRESENTATION_ERROR


class TestIntegerSequenceChecker:
    """Tests for IntegerSequenceChecker"""

    def test_equal_sequences(self, check):
        outcome = check(IntegerSequenceChecker(), "1 2 3\n", "1 2 3\n")
        assert outcome.passed
        assert outcome.message == '3 number(s): "1 2 3"'

    def test_malformed_output_is_presentation_error(self, check):
        assert check(IntegerSequenceChecker(), "1 x", "1 2").verdict is Verdict.PRESENTATION_ERROR

    def test_different_number_is_wrong(self, check):
        outcome = check(IntegerSequenceChecker(), "1 3", "1 2")
        assert outcome.verdict is Verdict.WRONG_ANSWER
        assert "2nd numbers differ - expected 2, found 3" in outcome.message

    def test_malformed_answer_is_fail(self, check):
        assert check(IntegerSequenceChecker(), "1 2", "1 y").verdict is Verdict.FAIL


class TestFloatChecker:
    """Tests for FloatChecker"""

    @pytest.fixture
    def checker(self):
        return FloatChecker(abs_tolerance=1e-6, rel_tolerance=1e-6)

    def test_within_absolute_tolerance(self, check, checker):
        assert check(checker, "0.3333333", "0.333333333").passed

    def test_outside_tolerance(self, check, checker):
        outcome = check(checker, "0.34", "0.3333")
        assert outcome.verdict is Verdict.WRONG_ANSWER
        assert "1st numbers differ" in outcome.message

    def test_within_relative_tolerance(self, check, checker):
        assert check(checker, "1000000.5", "1000000").passed

    def test_tolerance_from_config(self):
        checker = get_checker("floats", KuroeConfig(float_abs_tolerance=0.1))
        assert checker.abs_tolerance == 0.1

    def test_tolerance_from_params(self):
        checker = get_checker("floats", params=Params({"abs_tolerance": "0.5"}))
        assert checker.abs_tolerance == 0.5


class TestYesNoChecker:
    """Tests for YesNoChecker"""

    def test_case_insensitive(self, check):
        assert check(YesNoChecker(), "yes\n", "YES\n").passed

    def test_wrong_answer(self, check):
        assert check(YesNoChecker(), "no\n", "YES\n").verdict is Verdict.WRONG_ANSWER

    def test_unexpected_output_word(self, check):
        assert check(YesNoChecker(), "maybe\n", "YES\n").verdict is Verdict.PRESENTATION_ERROR

    def test_unexpected_answer_word_is_fail(self, check):
        assert check(YesNoChecker(), "YES\n", "perhaps\n").verdict is Verdict.FAIL


class TestFunctionChecker:
    """Tests for plain-function checkers"""

    def test_default_message(self, check):
        def accept(inf, ouf, ans, params):
            ouf.read_token()

        outcome = check(FunctionChecker(accept), "1\n", "1\n")
        assert outcome.passed
        assert outcome.message == "ok"
        assert outcome.program == "accept"

    def test_crash_is_fail(self, check):
        def broken(inf, ouf, ans, params):
            return 1 / 0

        outcome = check(FunctionChecker(broken), "1\n", "1\n")
        assert outcome.verdict is Verdict.FAIL
        assert "ZeroDivisionError" in outcome.message


class TestGetChecker:
    """Tests for checker lookup"""

    def test_unknown_checker(self):
        with pytest.raises(KeyError):
            get_checker("nope")

    def test_list_checkers(self):
        assert list_checkers() == ["floats", "ints", "line", "lines", "tokens", "yesno"]
