"""Unit tests for the error policy."""

import pytest

from shellactions.config import ErrorOutput
from shellactions.exceptions import ProcessFailure
from shellactions.execution import (
    ErrorOutcome,
    InvocationResult,
    evaluate_result,
    report_errors,
)


def _result(exit_status=0, stderr=b""):
    return InvocationResult(exit_status=exit_status, stdout=b"out", stderr=stderr)


class TestEvaluateResult:
    """Test evaluate_result."""

    def test_success_continues(self):
        decision = evaluate_result(_result(), suppress_errors=False)

        assert decision.outcome is ErrorOutcome.CONTINUE
        assert not decision.failed
        decision.raise_for_abort()

    def test_nonzero_exit_aborts(self):
        decision = evaluate_result(_result(exit_status=3), suppress_errors=False)

        assert decision.outcome is ErrorOutcome.ABORT
        with pytest.raises(ProcessFailure) as exc_info:
            decision.raise_for_abort()
        assert exc_info.value.exit_status == 3

    def test_stderr_aborts_even_on_success(self):
        decision = evaluate_result(_result(stderr=b"warning: odd input\n"), suppress_errors=False)

        assert decision.outcome is ErrorOutcome.ABORT
        with pytest.raises(ProcessFailure, match="odd input"):
            decision.raise_for_abort()

    def test_whitespace_stderr_is_an_error(self):
        decision = evaluate_result(_result(stderr=b"\n"), suppress_errors=False)

        assert decision.outcome is ErrorOutcome.ABORT
        assert decision.stderr == "\n"

    def test_suppressed_failure_continues(self):
        decision = evaluate_result(_result(exit_status=1, stderr=b"boom"), suppress_errors=True)

        assert decision.outcome is ErrorOutcome.CONTINUE
        assert decision.failed
        assert decision.stderr == "boom"


class TestReportErrors:
    """Test report_errors routing."""

    @pytest.mark.asyncio
    async def test_console(self, mock_bridge):
        decision = evaluate_result(_result(exit_status=1, stderr=b"boom"), suppress_errors=True)

        await report_errors(decision, ErrorOutput.CONSOLE, mock_bridge)

        mock_bridge.show_console.assert_awaited_once_with("boom")

    @pytest.mark.asyncio
    async def test_html_uses_base_url(self, mock_bridge):
        decision = evaluate_result(_result(stderr=b"<p>bad</p>"), suppress_errors=True)

        await report_errors(decision, ErrorOutput.HTML, mock_bridge, base_url="/sugar")

        mock_bridge.show_html.assert_awaited_once_with("<p>bad</p>", "/sugar")

    @pytest.mark.asyncio
    async def test_sheet(self, mock_bridge):
        decision = evaluate_result(_result(stderr=b"bad"), suppress_errors=True)

        await report_errors(decision, ErrorOutput.SHEET, mock_bridge)

        mock_bridge.show_sheet.assert_awaited_once_with("bad")

    @pytest.mark.asyncio
    async def test_log_does_not_touch_bridge(self, mock_bridge):
        decision = evaluate_result(_result(stderr=b"bad"), suppress_errors=True)

        await report_errors(decision, ErrorOutput.LOG, mock_bridge)

        mock_bridge.show_console.assert_not_awaited()
        mock_bridge.show_html.assert_not_awaited()
        mock_bridge.show_sheet.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_stderr_nothing_shown(self, mock_bridge):
        decision = evaluate_result(_result(exit_status=2), suppress_errors=True)

        await report_errors(decision, ErrorOutput.SHEET, mock_bridge)

        mock_bridge.show_sheet.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_whitespace_stderr_is_shown(self, mock_bridge):
        decision = evaluate_result(_result(stderr=b"\n"), suppress_errors=True)

        await report_errors(decision, ErrorOutput.SHEET, mock_bridge)

        mock_bridge.show_sheet.assert_awaited_once_with("\n")
