"""Tests for StepRunner navigation."""

import pytest

from support_stepper.domain.models import Article, Step
from support_stepper.execution.runner import ALREADY_AT_FIRST_STEP, RunnerPhase, StepRunner
from support_stepper.state.models import FailureReason

from conftest import FIXED_NOW, fixed_clock


def _article_with(n: int) -> Article:
    return Article(
        id=f"n{n}",
        title="Generated",
        steps=tuple(Step(id=f"s{i}", text=f"Step {i}") for i in range(n)),
    )


# ---------------------------------------------------------------------------
# Starting
# ---------------------------------------------------------------------------

class TestStartArticle:
    def test_returns_total_and_first_step(self, runner, email_article):
        started = runner.start_article("email", email_article)
        assert started.total_steps == 3
        assert started.current_step.step_id == "e1"
        assert started.current_step.step_number == 1
        assert started.current_step.is_first
        assert not started.current_step.is_last

    def test_initial_state(self, runner, email_article):
        runner.start_article("email", email_article)
        state = runner.state
        assert state.selected_article_id == "email"
        assert state.active_path == "main"
        assert state.current_step_index == 0
        assert state.completed_step_ids == []
        assert [p.path for p in state.attempted_paths] == ["main"]
        assert state.attempted_paths[0].started_at == FIXED_NOW

    def test_zero_step_article_is_complete(self, runner):
        empty = _article_with(0)
        started = runner.start_article(empty.id, empty)
        assert started.total_steps == 0
        assert started.current_step is None
        assert runner.is_complete(empty)
        assert runner.phase(empty) == RunnerPhase.COMPLETE

    def test_phases(self, runner, email_article):
        assert runner.phase(email_article) == RunnerPhase.IDLE
        runner.start_article("email", email_article)
        assert runner.phase(email_article) == RunnerPhase.IN_STEPS

    def test_start_discards_previous_session(self, runner, email_article, printer_article):
        runner.start_article("email", email_article)
        runner.continue_step(email_article)
        runner.record_failure("e2", FailureReason.OTHER)
        runner.start_article("printer", printer_article)
        state = runner.state
        assert state.completed_step_ids == []
        assert state.failure_history == []
        assert len(state.attempted_paths) == 1


# ---------------------------------------------------------------------------
# Continue
# ---------------------------------------------------------------------------

class TestContinue:
    @pytest.mark.parametrize("n", [1, 2, 3, 5])
    def test_completes_on_nth_call(self, runner, n):
        article = _article_with(n)
        runner.start_article(article.id, article)
        for i in range(1, n + 1):
            result = runner.continue_step(article)
            assert result.completed is (i == n)
        assert runner.is_complete(article)
        assert runner.state.completed_step_ids == [f"s{i}" for i in range(n)]

    def test_continue_past_end_is_noop(self, runner):
        article = _article_with(2)
        runner.start_article(article.id, article)
        runner.continue_step(article)
        runner.continue_step(article)
        result = runner.continue_step(article)
        assert result.completed is True
        assert result.advanced is False
        assert runner.state.current_step_index == 2
        assert len(runner.state.completed_step_ids) == 2

    def test_reports_next_step(self, runner, email_article):
        runner.start_article("email", email_article)
        result = runner.continue_step(email_article)
        assert result.advanced
        assert result.next_step.step_id == "e2"
        assert result.next_step.expected_result == "Outbox is empty."
        assert result.current_step_index == 1
        assert result.total_steps == 3

    def test_last_step_flags(self, runner, email_article):
        runner.start_article("email", email_article)
        runner.continue_step(email_article)
        result = runner.continue_step(email_article)
        assert result.next_step.is_last
        assert result.next_step.say_to_customer == "Please click Send/Receive."

    def test_stale_trigger_does_not_advance(self, runner, email_article):
        runner.start_article("email", email_article)
        first = runner.continue_step(email_article, expected_step_id="e1")
        duplicate = runner.continue_step(email_article, expected_step_id="e1")
        assert first.advanced
        assert duplicate.advanced is False
        assert duplicate.next_step.step_id == "e2"
        assert runner.state.current_step_index == 1

    def test_without_article_is_noop(self, runner):
        result = runner.continue_step(None)
        assert result.completed is True
        assert result.advanced is False

    def test_recompleting_after_back_keeps_ids_distinct(self, runner, email_article):
        runner.start_article("email", email_article)
        runner.continue_step(email_article)
        runner.back()
        runner.continue_step(email_article)
        assert runner.state.completed_step_ids == ["e1"]


# ---------------------------------------------------------------------------
# Back
# ---------------------------------------------------------------------------

class TestBack:
    def test_at_first_step_fails(self, runner, email_article):
        runner.start_article("email", email_article)
        result = runner.back()
        assert result.success is False
        assert result.message == ALREADY_AT_FIRST_STEP
        assert runner.state.current_step_index == 0

    def test_repeated_back_never_goes_negative(self, runner, email_article):
        runner.start_article("email", email_article)
        runner.continue_step(email_article)
        assert runner.back().success
        for _ in range(3):
            assert runner.back().success is False
        assert runner.state.current_step_index == 0

    def test_back_keeps_completed_ids(self, runner, email_article):
        runner.start_article("email", email_article)
        runner.continue_step(email_article)
        runner.continue_step(email_article)
        runner.back()
        assert runner.get_current_step(email_article).id == "e2"
        assert runner.state.completed_step_ids == ["e1", "e2"]

    def test_back_from_complete(self, runner):
        article = _article_with(1)
        runner.start_article(article.id, article)
        runner.continue_step(article)
        assert runner.back().success
        assert not runner.is_complete(article)


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestRecordFailure:
    def test_append_only_across_navigation(self, runner, email_article):
        runner.start_article("email", email_article)
        runner.record_failure("e1", FailureReason.NO_CHANGE, "nothing happened")
        runner.continue_step(email_article)
        runner.record_failure("e2", "system-error")
        runner.back()
        runner.back()
        runner.record_failure("e1", FailureReason.OTHER)
        history = runner.state.failure_history
        assert len(history) == 3
        assert [f.step_id for f in history] == ["e1", "e2", "e1"]
        assert history[1].reason_category == FailureReason.SYSTEM_ERROR
        assert history[0].note == "nothing happened"
        assert history[0].timestamp == FIXED_NOW

    def test_does_not_move(self, runner, email_article):
        runner.start_article("email", email_article)
        runner.continue_step(email_article)
        runner.record_failure("e2", FailureReason.OTHER)
        assert runner.state.current_step_index == 1

    def test_rejects_unknown_reason(self, runner):
        with pytest.raises(ValueError):
            runner.record_failure("e1", "made-up-reason")


# ---------------------------------------------------------------------------
# Summary & reset
# ---------------------------------------------------------------------------

class TestSummaryAndReset:
    def test_partial_summary(self, runner, email_article):
        runner.start_article("email", email_article)
        runner.continue_step(email_article)
        runner.record_failure("e2", FailureReason.OTHER, "x")
        summary = runner.get_completion_summary()
        assert summary.article_id == "email"
        assert summary.completed_steps == ["e1"]
        assert len(summary.failure_history) == 1
        assert [p.path for p in summary.attempted_paths] == ["main"]
        assert summary.completed_at == FIXED_NOW

    def test_summary_is_a_copy(self, runner, email_article):
        runner.start_article("email", email_article)
        runner.continue_step(email_article)
        summary = runner.get_completion_summary()
        summary.completed_steps.append("tampered")
        assert runner.state.completed_step_ids == ["e1"]

    def test_reset_returns_to_idle(self, runner, email_article):
        runner.start_article("email", email_article)
        runner.reset()
        assert runner.phase(email_article) == RunnerPhase.IDLE
        assert runner.get_current_step(email_article) is None

    def test_reset_then_start_matches_fresh_start(self, runner, email_article):
        runner.start_article("email", email_article)
        runner.continue_step(email_article)
        runner.record_failure("e2", FailureReason.OTHER)
        runner.switch_to_fallback("fb-settings", email_article, ["Restart Outlook."])
        runner.reset()
        runner.start_article("email", email_article)

        fresh = StepRunner(clock=fixed_clock)
        fresh.start_article("email", email_article)
        assert runner.state == fresh.state
        assert runner.state.skipped_steps_count == 0
