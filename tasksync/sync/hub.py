"""Broadcast hub: fan-out of authoritative snapshots to connected sessions.

Delivery is fire-and-forget and at-most-once per broadcast. A session that
misses a snapshot (slow, or briefly gone) is made whole by the next one,
or by the fresh snapshot it receives when it reconnects; every snapshot
carries the full state, so nothing in between needs to be replayed.

Each session gets its own bounded queue drained by its own sender task.
Sessions never wait on each other, and within one session snapshots leave
in the order they were queued. When a queue is full the oldest pending
snapshot is discarded, since the newer one supersedes it.
"""

import asyncio
from collections.abc import Sequence
from contextlib import suppress
from datetime import UTC, datetime
from uuid import uuid4

from fastapi import WebSocket

from tasksync.observability.logging import get_logger
from tasksync.observability.metrics import BROADCASTS, CONNECTED_SESSIONS, SNAPSHOTS_DROPPED
from tasksync.sync.models import TodoSnapshot
from tasksync.todos.models import Todo

logger = get_logger(__name__)


class ClientSession:
    """One client connected to the push channel."""

    def __init__(self, websocket: WebSocket, queue_size: int = 8) -> None:
        self.session_id = uuid4().hex
        self.websocket = websocket
        self.connected_at = datetime.now(UTC)
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=queue_size)

    @property
    def pending(self) -> int:
        """Snapshots queued but not yet sent."""
        return self._queue.qsize()

    def enqueue(self, payload: str) -> bool:
        """Queue a serialized snapshot.

        Returns False if an older pending snapshot had to be dropped.
        """
        dropped = False
        if self._queue.full():
            self._queue.get_nowait()
            dropped = True
        self._queue.put_nowait(payload)
        return not dropped

    async def next_payload(self) -> str:
        return await self._queue.get()


class BroadcastHub:
    """Registry of connected sessions, owned by the running application."""

    def __init__(self, queue_size: int = 8) -> None:
        self._queue_size = queue_size
        self._sessions: dict[str, ClientSession] = {}
        self._senders: dict[str, asyncio.Task[None]] = {}

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    @property
    def sessions(self) -> tuple[ClientSession, ...]:
        return tuple(self._sessions.values())

    def is_connected(self, session: ClientSession) -> bool:
        return session.session_id in self._sessions

    async def connect(self, websocket: WebSocket) -> ClientSession:
        """Accept a websocket and register it as a session."""
        await websocket.accept()

        session = ClientSession(websocket, queue_size=self._queue_size)
        self._sessions[session.session_id] = session
        self._senders[session.session_id] = asyncio.create_task(
            self._pump(session),
            name=f"tasksync-sender-{session.session_id}",
        )
        CONNECTED_SESSIONS.set(len(self._sessions))

        logger.info(
            "session_connected",
            session_id=session.session_id,
            client=websocket.client.host if websocket.client else None,
            sessions=len(self._sessions),
        )
        return session

    async def disconnect(self, session: ClientSession) -> None:
        """Unregister a session and stop its sender. Safe to call twice."""
        if self._sessions.pop(session.session_id, None) is None:
            return
        CONNECTED_SESSIONS.set(len(self._sessions))

        sender = self._senders.pop(session.session_id, None)
        if sender is not None and sender is not asyncio.current_task():
            sender.cancel()
            with suppress(asyncio.CancelledError):
                await sender

        logger.info(
            "session_disconnected",
            session_id=session.session_id,
            sessions=len(self._sessions),
        )

    async def broadcast(self, todos: Sequence[Todo]) -> None:
        """Queue the full ordered list for every connected session."""
        payload = TodoSnapshot(todos=list(todos)).to_wire()
        sessions = list(self._sessions.values())
        for session in sessions:
            self._enqueue(session, payload)

        BROADCASTS.inc()
        logger.debug("broadcast_queued", sessions=len(sessions), todos=len(todos))

    async def send_snapshot(self, session: ClientSession, todos: Sequence[Todo]) -> None:
        """Queue the full ordered list for one session."""
        if not self.is_connected(session):
            return
        self._enqueue(session, TodoSnapshot(todos=list(todos)).to_wire())

    async def close(self) -> None:
        """Disconnect every session (application shutdown)."""
        for session in list(self._sessions.values()):
            await self.disconnect(session)

    def _enqueue(self, session: ClientSession, payload: str) -> None:
        if not session.enqueue(payload):
            SNAPSHOTS_DROPPED.inc()
            logger.debug("snapshot_superseded", session_id=session.session_id)

    async def _pump(self, session: ClientSession) -> None:
        """Send queued snapshots to one session until it goes away."""
        while True:
            payload = await session.next_payload()
            try:
                await session.websocket.send_text(payload)
            except Exception as e:
                logger.info(
                    "session_send_failed",
                    session_id=session.session_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                break

        await self.disconnect(session)
