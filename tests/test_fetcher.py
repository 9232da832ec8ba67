"""Tests for the fetcher module."""

import time
from datetime import datetime, timezone

import pytest

from inboxtally.fetcher import (
    build_unread_query,
    fetch_label_names,
    fetch_message_meta,
    fetch_message_metas,
    list_unread_message_ids,
)
from inboxtally.models import MessageMeta

from gmail_mocks import MockGmailService, MockLabels, MockMessages, http_error, make_meta


def _service_with_ids(count: int, **kwargs) -> MockGmailService:
    ids = [f"m{i}" for i in range(count)]
    return MockGmailService(messages=MockMessages(ids, {}, **kwargs))


class TestUnreadQuery:
    """Tests for the search query."""

    def test_query_uses_lookback_window(self):
        now = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
        assert build_unread_query(7, now=now) == "is:unread after:2024/03/03"

    def test_query_crosses_month_boundary(self):
        now = datetime(2024, 3, 2, tzinfo=timezone.utc)
        assert build_unread_query(7, now=now) == "is:unread after:2024/02/24"


class TestListUnreadMessageIds:
    """Tests for paginated id listing."""

    def test_single_page(self, gmail):
        ids = list_unread_message_ids(gmail)

        assert ids == ["m1", "m2", "m3", "m4", "m5", "m6"]
        assert len(gmail.messages.list_calls) == 1
        call = gmail.messages.list_calls[0]
        assert call["maxResults"] == 500
        assert call["pageToken"] is None
        assert call["q"].startswith("is:unread after:")

    def test_follows_page_tokens(self):
        service = _service_with_ids(1200)

        ids = list_unread_message_ids(service, max_messages=5000)

        assert len(ids) == 1200
        assert [c["pageToken"] for c in service.messages.list_calls] == [None, "500", "1000"]

    def test_stops_at_max_even_with_next_page(self):
        """No further page is requested once the limit is reached."""
        service = _service_with_ids(1500)

        ids = list_unread_message_ids(service, max_messages=500)

        assert len(ids) == 500
        assert len(service.messages.list_calls) == 1

    def test_truncates_last_page(self):
        service = _service_with_ids(1500)

        ids = list_unread_message_ids(service, max_messages=700)

        assert len(ids) == 700
        assert ids[-1] == "m699"
        assert len(service.messages.list_calls) == 2

    def test_page_size_is_capped(self):
        service = _service_with_ids(10)

        list_unread_message_ids(service, page_size=1000)

        assert service.messages.list_calls[0]["maxResults"] == 500

    def test_failed_page_returns_partial_result(self):
        service = _service_with_ids(1200, fail_pages={1})

        ids = list_unread_message_ids(service, max_messages=5000)

        assert len(ids) == 500
        assert len(service.messages.list_calls) == 2

    def test_failed_first_page_returns_empty(self):
        service = _service_with_ids(10, fail_pages={0})

        assert list_unread_message_ids(service) == []

    def test_empty_mailbox(self):
        service = _service_with_ids(0)

        assert list_unread_message_ids(service) == []
        assert len(service.messages.list_calls) == 1


class TestFetchMessageMeta:
    """Tests for single message metadata fetch."""

    def test_requests_minimal_fields(self, gmail):
        meta = fetch_message_meta(gmail, "m1")

        assert meta == MessageMeta("m1", "t1", frozenset({"UNREAD", "INBOX", "Label_Work"}))
        call = gmail.messages.get_calls[0]
        assert call["format"] == "minimal"
        assert call["fields"] == "id,threadId,labelIds"

    def test_missing_labels_become_empty(self):
        messages = MockMessages(["m1"], {"m1": {"id": "m1", "threadId": "t1"}})

        meta = fetch_message_meta(MockGmailService(messages=messages), "m1")

        assert meta.label_ids == frozenset()

    def test_failure_returns_none(self):
        messages = MockMessages(["m1"], {}, fail_ids={"m1"})

        assert fetch_message_meta(MockGmailService(messages=messages), "m1") is None


class TestFetchMessageMetas:
    """Tests for batched metadata fetching."""

    def test_resolves_all_ids(self, gmail):
        ids = ["m1", "m2", "m3", "m4", "m5", "m6"]

        metas = fetch_message_metas(ids, lambda: gmail, batch_size=4, batch_delay_ms=0)

        assert sorted(m.id for m in metas) == ids

    def test_failed_ids_are_dropped(self):
        metas = {mid: make_meta(mid, "t1", ["INBOX"]) for mid in ("a", "b", "c")}
        messages = MockMessages(list(metas), metas, fail_ids={"b"})
        service = MockGmailService(messages=messages)

        result = fetch_message_metas(["a", "b", "c"], lambda: service, batch_delay_ms=0)

        assert sorted(m.id for m in result) == ["a", "c"]
        assert len(messages.get_calls) == 3

    def test_batches_respect_size(self):
        service = _service_with_ids(25, get_delay=0.02)
        ids = service.messages.message_ids
        progress = []

        fetch_message_metas(
            ids,
            lambda: service,
            batch_size=10,
            batch_delay_ms=0,
            progress_callback=lambda done, total: progress.append((done, total)),
        )

        assert progress == [(10, 25), (20, 25), (25, 25)]
        assert service.messages.max_active <= 10

    def test_batches_do_not_overlap(self):
        """The next batch starts only after the previous one finished and the pause ran."""
        service = _service_with_ids(30, get_delay=0.03)

        fetch_message_metas(
            service.messages.message_ids, lambda: service, batch_size=10, batch_delay_ms=50
        )

        starts = service.messages.get_times
        assert len(starts) == 30
        for n in range(2):
            previous = starts[n * 10 : (n + 1) * 10]
            following = starts[(n + 1) * 10 : (n + 2) * 10]
            assert min(following) - max(previous) >= 0.07

    def test_batches_run_concurrently(self):
        service = _service_with_ids(5, get_delay=0.05)

        fetch_message_metas(service.messages.message_ids, lambda: service, batch_size=5)

        assert service.messages.max_active > 1

    def test_delay_between_batches(self):
        """Wall time is at least (batches - 1) * delay."""
        service = _service_with_ids(30)

        start = time.monotonic()
        fetch_message_metas(
            service.messages.message_ids, lambda: service, batch_size=10, batch_delay_ms=50
        )
        elapsed = time.monotonic() - start

        assert elapsed >= 0.1

    def test_no_delay_after_last_batch(self):
        service = _service_with_ids(10)

        start = time.monotonic()
        fetch_message_metas(
            service.messages.message_ids, lambda: service, batch_size=10, batch_delay_ms=500
        )

        assert time.monotonic() - start < 0.5

    def test_empty_input(self):
        calls = []

        result = fetch_message_metas([], lambda: calls.append(1))

        assert result == []
        assert calls == []

    def test_invalid_batch_size(self):
        with pytest.raises(ValueError):
            fetch_message_metas(["m1"], lambda: None, batch_size=0)


class TestFetchLabelNames:
    """Tests for label name lookup."""

    def test_user_labels_only(self):
        labels = MockLabels(
            [
                {"id": "INBOX", "name": "INBOX", "type": "system"},
                {"id": "CATEGORY_SOCIAL", "name": "CATEGORY_SOCIAL", "type": "system"},
                {"id": "Label_1", "name": "Work", "type": "user"},
                {"id": "Label_2", "name": "Work/Clients", "type": "user"},
                {"id": "Label_3", "name": "Blocked", "type": "user"},
            ]
        )

        names = fetch_label_names(MockGmailService(labels=labels))

        assert names == {"Label_1": "Work", "Label_2": "Work/Clients"}

    def test_error_propagates(self):
        from googleapiclient.errors import HttpError

        labels = MockLabels([], error=http_error(401, "Unauthorized"))

        with pytest.raises(HttpError):
            fetch_label_names(MockGmailService(labels=labels))
