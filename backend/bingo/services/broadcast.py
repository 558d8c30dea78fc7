from typing import Any, Dict


class Broadcaster:
    """Delivers events to connected clients.

    ``to_room`` fans out to every connection subscribed to a room and
    ``to_connection`` answers a single connection. Services only talk to
    this interface; the transport lives behind it.
    """

    def to_room(self, event: str, payload: Dict[str, Any], room_id: str) -> None:
        raise NotImplementedError

    def to_connection(self, event: str, payload: Dict[str, Any], sid: str) -> None:
        raise NotImplementedError


class SocketIOBroadcaster(Broadcaster):
    def __init__(self, socketio, namespace='/'):
        self.socketio = socketio
        self.namespace = namespace

    def to_room(self, event, payload, room_id):
        self.socketio.emit(event, payload, to=room_id, namespace=self.namespace)

    def to_connection(self, event, payload, sid):
        if sid is None:
            return
        self.socketio.emit(event, payload, to=sid, namespace=self.namespace)
