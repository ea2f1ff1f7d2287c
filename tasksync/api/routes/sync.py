"""Push channel: a websocket per client session.

On connect the session receives the current list once; after that it
receives a full snapshot after every committed mutation. The client may
send `{"type": "resync"}` to get the current list again; anything else it
sends is ignored.
"""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from tasksync.api.dependencies import BroadcastHubDep, TodoServiceDep
from tasksync.observability.logging import get_logger
from tasksync.sync.models import ResyncRequest
from tasksync.todos.errors import StorageError

logger = get_logger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def todo_updates(
    websocket: WebSocket,
    service: TodoServiceDep,
    hub: BroadcastHubDep,
) -> None:
    """Stream authoritative snapshots to one client session."""
    session = await hub.connect(websocket)
    try:
        await service.sync_session(session)

        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            # text or binary frames; both may carry a resync request
            payload = message.get("text") or message.get("bytes")
            if not payload:
                logger.debug("ws_message_ignored", session_id=session.session_id)
                continue
            try:
                ResyncRequest.model_validate_json(payload)
            except ValidationError:
                logger.debug("ws_message_ignored", session_id=session.session_id)
                continue

            logger.info("session_resync_requested", session_id=session.session_id)
            await service.sync_session(session)
    except WebSocketDisconnect as e:
        logger.debug("session_closed_by_client", session_id=session.session_id, code=e.code)
    except StorageError as e:
        logger.error("session_sync_failed", session_id=session.session_id, error=str(e))
        await websocket.close(code=1011)
    finally:
        await hub.disconnect(session)
