"""Shared test fixtures for inboxtally tests."""

import pytest

from gmail_mocks import MockGmailService, MockMessages, make_meta


@pytest.fixture
def mailbox():
    """Six unread messages over four threads."""
    metas = {
        "m1": make_meta("m1", "t1", ["UNREAD", "INBOX", "Label_Work"]),
        "m2": make_meta("m2", "t1", ["UNREAD", "INBOX", "Label_Work"]),
        "m3": make_meta("m3", "t2", ["UNREAD", "CATEGORY_PROMOTIONS"]),
        "m4": make_meta("m4", "t3", ["UNREAD", "Label_ProjectX"]),
        "m5": make_meta("m5", "t3", ["UNREAD", "STARRED"]),
        "m6": make_meta("m6", "t4", ["UNREAD"]),
    }
    return MockMessages(list(metas), metas)


@pytest.fixture
def gmail(mailbox):
    return MockGmailService(messages=mailbox)
