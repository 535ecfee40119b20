import pytest

from airdrop.core.exceptions import DispatchError, SubmissionFailed, SubmissionRejected
from airdrop.domain.dispatch.dispatcher import AtomicDispatcher, SequentialDispatcher
from airdrop.domain.dispatch.models import ItemBatch, SubmissionPlan, URLItem


def run_sequential(service, batch):
    progress = []
    outcomes = []
    dispatcher = SequentialDispatcher(service, progress_callback=progress.append)

    def on_drained(outcome):
        outcomes.append(outcome)
        service.stop()

    service.run(lambda: dispatcher.start(batch, on_drained))
    return dispatcher, progress, outcomes


class TestSequentialDispatcher:
    def test_all_succeed(self, file_batch, make_service):
        service = make_service()

        dispatcher, progress, outcomes = run_sequential(service, file_batch)

        assert len(outcomes) == 1
        outcome = outcomes[0]
        assert (outcome.success_count, outcome.failure_count) == (3, 0)
        assert outcome.plan is SubmissionPlan.SEQUENTIAL
        assert outcome.exit_code == 0
        assert service.submissions == [(item,) for item in file_batch]
        assert dispatcher.state.is_drained

    def test_pre_submission_rejection_counts_as_failure(self, file_batch, make_service):
        first, second, third = file_batch.items
        service = make_service(reject={str(second)})

        _, progress, outcomes = run_sequential(service, file_batch)

        outcome = outcomes[0]
        assert (outcome.success_count, outcome.failure_count) == (2, 1)
        assert outcome.exit_code == 1
        assert service.submissions == [(first,), (third,)]
        assert [result.items for result in progress] == [(first,), (second,), (third,)]
        assert [result.success for result in progress] == [True, False, True]
        assert progress[1].rejected
        assert isinstance(progress[1].error, SubmissionRejected)
        assert progress[1].reason == f"Cannot share: {second}"

    def test_failed_completion_does_not_halt_run(self, make_service):
        batch = ItemBatch.of([URLItem(f"https://example.com/{n}") for n in range(4)])
        service = make_service(fail={"https://example.com/1": "Declined by recipient"})

        _, progress, outcomes = run_sequential(service, batch)

        outcome = outcomes[0]
        assert (outcome.success_count, outcome.failure_count) == (3, 1)
        failed = progress[1]
        assert isinstance(failed.error, SubmissionFailed)
        assert failed.reason == "Declined by recipient"
        assert not failed.rejected
        assert len(service.submissions) == 4

    def test_everything_rejected_drains_without_submitting(self, url_batch, make_service):
        service = make_service(reject={str(item) for item in url_batch})

        _, _, outcomes = run_sequential(service, url_batch)

        assert (outcomes[0].success_count, outcomes[0].failure_count) == (0, 2)
        assert service.submissions == []

    @pytest.mark.parametrize("size", [1, 2, 5, 12])
    def test_counts_add_up_to_batch_size(self, size, make_service):
        items = [URLItem(f"https://example.com/{n}") for n in range(size)]
        service = make_service(
            reject={str(item) for item in items[::3]},
            fail={str(item): "nope" for item in items[1::4]},
        )

        _, progress, outcomes = run_sequential(service, ItemBatch.of(items))

        assert outcomes[0].total == size
        assert len(progress) == size
        assert [result.items[0] for result in progress] == items

    def test_one_submission_in_flight(self, make_service):
        batch = ItemBatch.of([URLItem(f"https://example.com/{n}") for n in range(6)])
        service = make_service()

        run_sequential(service, batch)

        assert service.max_in_flight == 1

    def test_cannot_start_twice(self, url_batch, make_service):
        service = make_service()
        dispatcher, _, _ = run_sequential(service, url_batch)

        with pytest.raises(DispatchError):
            dispatcher.start(url_batch, lambda outcome: None)

    def test_stray_completion(self, url_batch, make_service):
        service = make_service()
        dispatcher, _, _ = run_sequential(service, url_batch)

        with pytest.raises(DispatchError):
            dispatcher._handle_success()

    def test_waits_for_completion_before_next_item(self, url_batch, make_service):
        service = make_service(hang=True)
        dispatcher = SequentialDispatcher(service)
        outcomes = []

        service.run(lambda: dispatcher.start(url_batch, outcomes.append))

        assert outcomes == []
        assert service.submissions == [(url_batch.items[0],)]
        assert dispatcher.in_flight == url_batch.items[0]
        assert list(dispatcher.state.remaining_items) == list(url_batch.items)


class TestAtomicDispatcher:
    def run(self, service, batch):
        progress = []
        outcomes = []
        dispatcher = AtomicDispatcher(service, progress_callback=progress.append)

        def on_done(outcome):
            outcomes.append(outcome)
            service.stop()

        service.run(lambda: dispatcher.start(batch, on_done))
        return dispatcher, progress, outcomes

    def test_success_counts_whole_batch(self, file_batch, make_service):
        service = make_service()

        _, progress, outcomes = self.run(service, file_batch)

        outcome = outcomes[0]
        assert (outcome.success_count, outcome.failure_count) == (3, 0)
        assert outcome.plan is SubmissionPlan.ATOMIC
        assert service.submissions == [file_batch.items]
        assert len(progress) == 1 and progress[0].success

    def test_failure_counts_whole_batch_without_fallback(self, file_batch, make_service):
        service = make_service(batch_failure="AirDrop was cancelled")

        _, progress, outcomes = self.run(service, file_batch)

        outcome = outcomes[0]
        assert (outcome.success_count, outcome.failure_count) == (0, 3)
        assert outcome.exit_code == 1
        assert service.submissions == [file_batch.items]
        assert progress[0].reason == "AirDrop was cancelled"

    def test_cannot_start_twice(self, url_batch, make_service):
        service = make_service()
        dispatcher, _, _ = self.run(service, url_batch)

        with pytest.raises(DispatchError):
            dispatcher.start(url_batch, lambda outcome: None)

    def test_stray_completion(self, url_batch, make_service):
        service = make_service()
        dispatcher, _, _ = self.run(service, url_batch)

        with pytest.raises(DispatchError):
            dispatcher._handle_failure("late")
