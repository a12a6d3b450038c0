# src/fipcontroller/core/watcher.py
"""
Watch feeds for nodes and services, merged into a single stream of tagged events.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator, Callable

from kubernetes_asyncio import watch
from kubernetes_asyncio.client.rest import ApiException

from .exceptions import WatchError

logger = logging.getLogger(__name__)

APPLIED_EVENT_TYPES = ("ADDED", "MODIFIED")


class ResourceKind(str, Enum):
    NODE = "Node"
    SERVICE = "Service"


@dataclass(frozen=True)
class NodeEvent:
    event_type: str
    node: Any
    kind: ResourceKind = ResourceKind.NODE


@dataclass(frozen=True)
class ServiceEvent:
    event_type: str
    service: Any
    kind: ResourceKind = ResourceKind.SERVICE


async def watch_applied(list_func: Callable, wrap: Callable[[str, Any], Any]) -> AsyncIterator:
    """
    Yields wrap(event_type, obj) for every object added or modified.

    The watch starts with the current objects as ADDED events. When the API
    server closes the connection, Watch reconnects on its own from the last
    seen resourceVersion (retrying a 410 Gone once). Deletions are skipped.

    Raises:
        WatchError: If the API server reports an error on the watch.
    """
    resource = getattr(list_func, "__name__", repr(list_func))
    logger.debug("Opening watch on %s", resource)
    try:
        async with watch.Watch().stream(list_func) as stream:
            async for event in stream:
                event_type = event["type"]
                if event_type not in APPLIED_EVENT_TYPES:
                    continue
                yield wrap(event_type, event["object"])
    except ApiException as e:
        raise WatchError(f"Watch on {resource} failed: {e.status} {e.reason}") from e


_DONE = object()


async def merge_streams(*streams: AsyncIterator) -> AsyncIterator:
    """
    Merges several async iterators into one, yielding items as they arrive.

    No ordering holds across sources. If any source raises, the merged stream
    raises the same exception and the other sources are cancelled.
    """
    # maxsize=1 keeps sources from running ahead of the consumer.
    queue: asyncio.Queue = asyncio.Queue(maxsize=1)

    async def pump(stream):
        try:
            async for item in stream:
                await queue.put((item, None))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            await queue.put((None, e))
            return
        await queue.put((_DONE, None))

    tasks = [asyncio.create_task(pump(stream)) for stream in streams]
    remaining = len(tasks)
    try:
        while remaining:
            item, error = await queue.get()
            if error is not None:
                raise error
            if item is _DONE:
                remaining -= 1
                continue
            yield item
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
