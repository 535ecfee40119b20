from airdrop.domain.dispatch.models import DispatchOutcome, SubmissionPlan
from airdrop.domain.dispatch.reporter import report


def test_no_failures_exits_zero():
    result = report(DispatchOutcome(success_count=3, failure_count=0))

    assert result.exit_code == 0
    assert result.summary == "Sharing completed: 3 successful, 0 failed"


def test_any_failure_exits_one():
    result = report(DispatchOutcome(success_count=2, failure_count=1))

    assert result.exit_code == 1
    assert result.summary == "Sharing completed: 2 successful, 1 failed"


def test_exit_code_ignores_success_count():
    assert report(DispatchOutcome(success_count=0, failure_count=0)).exit_code == 0
    assert report(DispatchOutcome(success_count=0, failure_count=4, plan=SubmissionPlan.ATOMIC)).exit_code == 1
