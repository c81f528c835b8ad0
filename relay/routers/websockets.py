from __future__ import annotations

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..config import WS_PATH
from ..coordinator import SessionCoordinator
from ..logging_config import get_logger
from ..transport import WebSocketPeer

logger = get_logger(__name__)

router = APIRouter(prefix="", tags=["ws"])


@router.websocket(WS_PATH)
async def relay_endpoint(ws: WebSocket):
    await ws.accept()
    coordinator: SessionCoordinator = ws.app.state.coordinator

    peer = WebSocketPeer(ws)
    peer.start()
    conn = coordinator.open(peer)
    peer.label = conn.client_id

    try:
        while True:
            message = await ws.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes")
            if raw is None:
                continue
            try:
                coordinator.handle_raw(conn, raw)
            except Exception as e:
                # Handler failures are logged; the connection stays open.
                logger.exception(f"Error handling message from {conn.client_id}: {e}")
    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.exception(f"Websocket error for {conn.client_id}: {e}")
    finally:
        coordinator.close(conn)
        await peer.close()
