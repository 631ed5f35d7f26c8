"""Tests for InsightBoard background refreshes."""

from concurrent.futures import Future
from datetime import date
from unittest.mock import Mock

import pytest

from conftest import make_invoice, make_payment
from core.copywriter import InvoiceCopywriter
from core.insights import LOADING_TEXT, NO_INVOICES_TEXT, InsightBoard


class ManualExecutor:
    """Executor that holds submitted work until the test runs it."""

    def __init__(self):
        self.pending: list[tuple[Future, tuple]] = []

    def submit(self, fn, *args):
        future = Future()
        self.pending.append((future, (fn, args)))
        return future

    def run(self, index: int) -> None:
        future, (fn, args) = self.pending[index]
        future.set_result(fn(*args))


@pytest.fixture
def copywriter():
    writer = Mock(spec=InvoiceCopywriter)
    writer.analyze_income.side_effect = ["first answer", "second answer"]
    return writer


@pytest.fixture
def executor():
    return ManualExecutor()


@pytest.fixture
def board(copywriter, executor):
    return InsightBoard(copywriter, executor=executor)


def _invoices():
    return [make_invoice(payments=[make_payment(500, when=date(2025, 6, 1))])]


class TestRefresh:

    def test_starts_with_loading_text(self, board):
        assert board.text == LOADING_TEXT

    def test_no_invoices_shows_placeholder_without_request(self, board, copywriter, executor):
        future = board.refresh([])

        assert future.result() is True
        assert board.text == NO_INVOICES_TEXT
        assert executor.pending == []
        copywriter.analyze_income.assert_not_called()

    def test_result_applied(self, board, executor):
        future = board.refresh(_invoices())
        executor.run(0)

        assert future.result() is True
        assert board.text == "first answer"

    def test_only_months_with_income_are_sent(self, board, copywriter, executor):
        board.refresh(_invoices())
        executor.run(0)

        points = copywriter.analyze_income.call_args.args[0]
        assert [(p.month, p.amount) for p in points] == [("Jun", 500)]


class TestStaleResponses:
    """A slow earlier request must not overwrite a newer one."""

    def test_older_response_arriving_last_is_discarded(self, board, executor):
        first = board.refresh(_invoices())
        second = board.refresh(_invoices())

        executor.run(1)
        executor.run(0)

        assert second.result() is True
        assert first.result() is False
        # Second submitted request got the first side_effect value
        assert board.text == "first answer"
        assert board.latest_token == 2

    def test_older_response_arriving_first_is_also_discarded(self, board, executor):
        first = board.refresh(_invoices())
        second = board.refresh(_invoices())

        executor.run(0)
        assert first.result() is False
        assert board.text == LOADING_TEXT

        executor.run(1)
        assert second.result() is True
        assert board.text == "second answer"

    def test_empty_refresh_supersedes_pending_request(self, board, executor):
        pending = board.refresh(_invoices())
        board.refresh([])

        executor.run(0)

        assert pending.result() is False
        assert board.text == NO_INVOICES_TEXT


class TestOwnedExecutor:

    def test_default_pool_runs_and_closes(self):
        writer = Mock(spec=InvoiceCopywriter)
        writer.analyze_income.return_value = "Steady income."
        board = InsightBoard(writer)

        assert board.refresh(_invoices()).result(timeout=5) is True
        board.close()

        assert board.text == "Steady income."
