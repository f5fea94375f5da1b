import pytest

from boards.events import InMemoryChangeFeed, reset_feed


@pytest.fixture(autouse=True)
def fresh_feed():
    feed = InMemoryChangeFeed()
    reset_feed(feed)
    yield feed
    reset_feed(None)
