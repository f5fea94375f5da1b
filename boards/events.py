# boards/events.py
"""
Change notifications for live boards.

A feed delivers signals (no payload) on named channels. subscribe() returns a
Subscription handle that must be cancelled; watch() and RefreshLoop pair a
subscription with the periodic refresh timer and release both together.

Backends:
- InMemoryChangeFeed: threading primitives, one process only
- RedisChangeFeed: Redis pub/sub, so a Celery worker can notify web processes
"""
from __future__ import annotations

import logging
import threading
import time
from collections import defaultdict
from typing import Callable, Dict, Iterator, Optional, Set

from django.conf import settings

logger = logging.getLogger(__name__)

EVENT_CHANGE = "change"
EVENT_TICK = "tick"


def board_channel(leaderboard_id: int) -> str:
    return f"board:{leaderboard_id}"


GOLF_CHANNEL = "golf"


class Subscription:
    """Cancellable handle returned by ChangeFeed.subscribe()."""

    channel: str

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until a notification arrives (True) or timeout elapses (False)."""
        raise NotImplementedError

    def cancel(self) -> None:
        raise NotImplementedError

    @property
    def cancelled(self) -> bool:
        raise NotImplementedError

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.cancel()
        return False


class ChangeFeed:
    def subscribe(self, channel: str) -> Subscription:
        raise NotImplementedError

    def publish(self, channel: str) -> None:
        raise NotImplementedError


# -----------------------------------------
# in-memory
# -----------------------------------------
class _MemorySubscription(Subscription):
    def __init__(self, feed: "InMemoryChangeFeed", channel: str):
        self.channel = channel
        self._feed = feed
        self._event = threading.Event()
        self._cancelled = False

    def _signal(self):
        self._event.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        if self._cancelled:
            return False
        fired = self._event.wait(timeout)
        # several notifications between two waits collapse into one
        self._event.clear()
        return fired and not self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._feed._remove(self)
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class InMemoryChangeFeed(ChangeFeed):
    def __init__(self):
        self._lock = threading.Lock()
        self._subs: Dict[str, Set[_MemorySubscription]] = defaultdict(set)

    def subscribe(self, channel: str) -> Subscription:
        sub = _MemorySubscription(self, channel)
        with self._lock:
            self._subs[channel].add(sub)
        return sub

    def publish(self, channel: str) -> None:
        with self._lock:
            targets = list(self._subs.get(channel, ()))
        for sub in targets:
            sub._signal()

    def subscriber_count(self, channel: str) -> int:
        with self._lock:
            return len(self._subs.get(channel, ()))

    def _remove(self, sub: _MemorySubscription):
        with self._lock:
            subs = self._subs.get(sub.channel)
            if subs is None:
                return
            subs.discard(sub)
            if not subs:
                del self._subs[sub.channel]


# -----------------------------------------
# redis pub/sub
# -----------------------------------------
class _RedisSubscription(Subscription):
    def __init__(self, pubsub, channel: str):
        self.channel = channel
        self._pubsub = pubsub
        self._cancelled = False

    def wait(self, timeout: Optional[float] = None) -> bool:
        if self._cancelled:
            return False
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            # subscribe confirmations come back as None; keep waiting until the deadline
            msg = self._pubsub.get_message(ignore_subscribe_messages=True, timeout=remaining)
            if msg is not None:
                break
            if deadline is not None and time.monotonic() >= deadline:
                return False
        # drain anything queued behind it
        while self._pubsub.get_message(ignore_subscribe_messages=True, timeout=0.0) is not None:
            pass
        return True

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        try:
            self._pubsub.unsubscribe(self.channel)
        finally:
            self._pubsub.close()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class RedisChangeFeed(ChangeFeed):
    def __init__(self, url: str, prefix: str = "scoreboard:"):
        from redis import Redis

        self._redis = Redis.from_url(url)
        self._prefix = prefix

    def _key(self, channel: str) -> str:
        return f"{self._prefix}{channel}"

    def subscribe(self, channel: str) -> Subscription:
        pubsub = self._redis.pubsub()
        pubsub.subscribe(self._key(channel))
        return _RedisSubscription(pubsub, self._key(channel))

    def publish(self, channel: str) -> None:
        self._redis.publish(self._key(channel), "changed")


# -----------------------------------------
# process-wide feed
# -----------------------------------------
_feed: Optional[ChangeFeed] = None
_feed_lock = threading.Lock()


def get_feed() -> ChangeFeed:
    global _feed
    with _feed_lock:
        if _feed is None:
            backend = getattr(settings, "CHANGE_FEED_BACKEND", "memory")
            if backend == "redis":
                _feed = RedisChangeFeed(settings.CHANGE_FEED_REDIS_URL)
            elif backend == "memory":
                _feed = InMemoryChangeFeed()
            else:
                raise ValueError(f"unknown CHANGE_FEED_BACKEND: {backend!r}")
            logger.info("change feed backend: %s", backend)
        return _feed


def reset_feed(feed: Optional[ChangeFeed] = None) -> None:
    """Swap the process-wide feed (tests)."""
    global _feed
    with _feed_lock:
        _feed = feed


def notify(channel: str) -> None:
    """Publish a change signal; a broken feed never breaks the write that triggered it."""
    try:
        get_feed().publish(channel)
    except Exception:
        logger.exception("change feed publish failed for %s", channel)


# -----------------------------------------
# subscription + timer
# -----------------------------------------
def watch(channel: str, interval: float, feed: Optional[ChangeFeed] = None) -> Iterator[str]:
    """
    Yield EVENT_CHANGE on every notification and EVENT_TICK every `interval`
    seconds without one. Closing the generator cancels the subscription.
    """
    feed = feed or get_feed()
    sub = feed.subscribe(channel)
    try:
        while not sub.cancelled:
            yield EVENT_CHANGE if sub.wait(interval) else EVENT_TICK
    finally:
        sub.cancel()


class RefreshLoop:
    """
    Calls on_refresh(reason) from a background thread on every change
    notification and on every timer tick. stop() releases the subscription
    and the timer together.
    """

    def __init__(
        self,
        channel: str,
        on_refresh: Callable[[str], None],
        interval: float = 30.0,
        feed: Optional[ChangeFeed] = None,
    ):
        self.channel = channel
        self.interval = interval
        self._on_refresh = on_refresh
        self._feed = feed or get_feed()
        self._sub: Optional[Subscription] = None
        self._thread: Optional[threading.Thread] = None
        self._stopping = threading.Event()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "RefreshLoop":
        if self._thread is not None:
            raise RuntimeError("RefreshLoop already started")
        self._sub = self._feed.subscribe(self.channel)
        self._thread = threading.Thread(target=self._run, name=f"refresh-{self.channel}", daemon=True)
        self._thread.start()
        return self

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._stopping.set()
        if self._sub is not None:
            self._sub.cancel()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def _run(self):
        sub = self._sub
        while not self._stopping.is_set():
            reason = EVENT_CHANGE if sub.wait(self.interval) else EVENT_TICK
            if self._stopping.is_set():
                break
            try:
                self._on_refresh(reason)
            except Exception:
                # keep the last rendered state; the next tick retries
                logger.exception("refresh failed for %s", self.channel)

    def __enter__(self):
        return self.start()

    def __exit__(self, *exc):
        self.stop()
        return False
