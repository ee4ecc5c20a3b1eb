"""Tests for Reply and the BaseRequest call lifecycle."""

import pytest

from qvimeo.request.reply import Reply
from qvimeo.request.types import RequestError, RequestStatus


class TestReply:
    def test_callback_runs_once_on_finish(self):
        reply = Reply("list", "/videos")
        seen = []
        reply.add_done_callback(seen.append)

        assert reply.finish(RequestStatus.READY, {"data": []})
        assert not reply.finish(RequestStatus.FAILED)

        assert seen == [reply]
        assert reply.status == RequestStatus.READY
        assert reply.result == {"data": []}

    def test_callback_added_after_finish_runs_immediately(self):
        reply = Reply("delete", "/videos/1")
        reply.finish(RequestStatus.FAILED, error=RequestError.NOT_FOUND_ERROR, error_string="gone")
        seen = []

        reply.add_done_callback(seen.append)

        assert seen == [reply]
        assert reply.error == RequestError.NOT_FOUND_ERROR
        assert reply.error_string == "gone"

    def test_second_continuation_rejected_while_pending(self):
        reply = Reply("list")
        reply.add_done_callback(lambda r: None)
        with pytest.raises(RuntimeError):
            reply.add_done_callback(lambda r: None)

    def test_non_terminal_status_rejected(self):
        reply = Reply("list")
        with pytest.raises(ValueError):
            reply.finish(RequestStatus.LOADING)
        assert not reply.done()


class TestBaseRequest:
    def test_status_and_finished_follow_call(self, fake_request):
        statuses = []
        finished = []
        fake_request.status_changed.connect(statuses.append)
        fake_request.finished.connect(lambda: finished.append(True))

        reply = fake_request.list("/videos")
        assert fake_request.status == RequestStatus.LOADING
        fake_request.complete({"data": []})

        assert reply.status == RequestStatus.READY
        assert fake_request.result == {"data": []}
        assert statuses == [RequestStatus.LOADING, RequestStatus.READY]
        assert finished == [True]

    def test_state_is_updated_before_continuation(self, fake_request):
        observed = []
        reply = fake_request.update("/videos/1", {"name": "x"})
        reply.add_done_callback(lambda r: observed.append(fake_request.status))

        fake_request.fail(RequestError.AUTHENTICATION_ERROR, "expired token")

        assert observed == [RequestStatus.FAILED]
        assert fake_request.error == RequestError.AUTHENTICATION_ERROR
        assert fake_request.error_string == "expired token"

    def test_cancel_settles_pending_reply(self, fake_request):
        reply = fake_request.delete("/videos/1")

        fake_request.cancel()

        assert reply.status == RequestStatus.CANCELED
        assert fake_request.status == RequestStatus.CANCELED
        assert fake_request.pending_reply is None

    def test_cancel_without_call_is_noop(self, fake_request):
        fake_request.cancel()
        assert fake_request.status == RequestStatus.IDLE

    def test_stale_completion_is_discarded(self, fake_request):
        first = fake_request.list("/videos")
        second = fake_request.list("/channels")

        fake_request._finish(first, RequestStatus.READY, {"data": [{"uri": "/videos/1"}]})

        assert first.status == RequestStatus.CANCELED
        assert not second.done()
        assert fake_request.status == RequestStatus.LOADING

    def test_credentials_notify(self, fake_request):
        tokens = []
        fake_request.access_token_changed.connect(tokens.append)

        fake_request.access_token = "abc"
        fake_request.access_token = "abc"

        assert tokens == ["abc"]
