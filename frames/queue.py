"""
Bounded frame queue with drop-oldest backpressure.

Frames arrive at the producer's rate; processing is slower and must not run
concurrently (one classification/OCR pass at a time). The queue buffers up to
`max_size` frames, drops the oldest pending frame when full, and drains
packets one at a time through an async handler on the running event loop.

State machine:
    Idle --enqueue--> Draining --queue empty--> Idle
    Draining --shutdown set--> Idle (pending packets are not started)
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Awaitable, Callable

from config import FRAME_QUEUE_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameMetadata:
    """Where a frame sits in the stream.

    Attributes:
        timestamp: Arrival time (seconds since the epoch).
        frame_number: 1-based sequence number assigned by the producer.
    """

    timestamp: float
    frame_number: int


@dataclass(frozen=True)
class FramePacket:
    """A frame owned by the queue between enqueue and dequeue."""

    frame_buffer: bytes
    metadata: FrameMetadata


FrameHandler = Callable[[FramePacket], Awaitable[object]]


class FrameQueue:
    """Bounded FIFO of frames drained by a single consumer task.

    `enqueue` must be called from code running on the event loop; it starts
    the drain task when the queue is idle. The drain loop awaits `handler`
    for one packet at a time. A handler failure is logged and the loop moves
    on to the next packet. There is no timeout: a handler that never returns
    stalls the queue.

    Usage:
        queue = FrameQueue(processor, max_size=30)
        queue.enqueue(jpeg_bytes, FrameMetadata(time.time(), 1))
        await queue.join()
    """

    def __init__(
        self,
        handler: FrameHandler,
        max_size: int = FRAME_QUEUE_SIZE,
        shutdown: threading.Event | None = None,
    ):
        """
        Args:
            handler: Async callable that processes one packet.
            max_size: Maximum number of pending packets.
            shutdown: Process-wide shutdown flag. Once set, enqueue is a
                      no-op and the drain loop stops before the next packet.
        """
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")

        self.max_size = max_size
        self._handler = handler
        self._shutdown = shutdown if shutdown is not None else threading.Event()
        self._packets: deque[FramePacket] = deque()
        self._draining = False
        self._drain_task: asyncio.Task | None = None

        self.processed = 0
        self.failed = 0
        self.dropped = 0

    def __len__(self) -> int:
        return len(self._packets)

    @property
    def is_draining(self) -> bool:
        return self._draining

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown.is_set()

    def pending(self) -> list[FrameMetadata]:
        """Metadata of pending packets, oldest first."""
        return [packet.metadata for packet in self._packets]

    def enqueue(self, frame_buffer: bytes, metadata: FrameMetadata) -> bool:
        """Add a frame, evicting the oldest pending frame if the queue is full.

        Returns:
            False if the frame was ignored because shutdown is in progress.

        Raises:
            RuntimeError: If called without a running event loop while idle.
        """
        if self._shutdown.is_set():
            logger.debug("Shutdown in progress; ignoring frame #%d", metadata.frame_number)
            return False

        if len(self._packets) >= self.max_size:
            evicted = self._packets.popleft()
            self.dropped += 1
            logger.warning(
                "Frame queue full (%d); dropped frame #%d",
                self.max_size,
                evicted.metadata.frame_number,
            )

        self._packets.append(FramePacket(frame_buffer=bytes(frame_buffer), metadata=metadata))
        logger.debug("Enqueued frame #%d", metadata.frame_number)

        if not self._draining:
            loop = asyncio.get_running_loop()
            self._draining = True
            self._drain_task = loop.create_task(self._drain())
        return True

    async def _drain(self) -> None:
        try:
            while self._packets and not self._shutdown.is_set():
                packet = self._packets.popleft()
                frame_number = packet.metadata.frame_number
                try:
                    await self._handler(packet)
                except Exception:
                    self.failed += 1
                    logger.exception("Failed to process frame #%d", frame_number)
                else:
                    self.processed += 1
                    logger.debug("Processed frame #%d", frame_number)
        finally:
            self._draining = False

    async def join(self) -> None:
        """Wait until the queue is idle (drained or stopped by shutdown)."""
        while self._drain_task is not None and not self._drain_task.done():
            await self._drain_task

    def shutdown(self) -> None:
        """Set the shutdown flag. The in-flight packet is allowed to finish."""
        self._shutdown.set()

    async def close(self) -> int:
        """Shut down, wait for the in-flight packet, and discard the rest.

        Returns:
            Number of pending packets that were abandoned.
        """
        self.shutdown()
        await self.join()
        abandoned = len(self._packets)
        self._packets.clear()
        if abandoned:
            logger.info("Frame queue closed; abandoned %d pending frames", abandoned)
        return abandoned
