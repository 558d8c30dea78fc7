import threading
import time
from contextlib import contextmanager
from typing import Dict, List, Optional

from bingo.exceptions import RoomNotFound
from bingo.models import Room, Session


class RoomStore:
    """In-memory registry of rooms and live connection sessions.

    One instance is built per application and shared by every service.
    Services wrap each mutation of a room (and the broadcast that follows it)
    in ``room_lock`` so that handlers running on different threads cannot
    interleave their changes to the same room.
    """

    def __init__(self) -> None:
        self._rooms: Dict[str, Room] = {}        # room_id -> Room
        self._sessions: Dict[str, Session] = {}  # sid -> Session
        self._room_locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    # ---- rooms ----

    def add_room(self, room: Room) -> Room:
        with self._registry_lock:
            if room.id in self._rooms:
                raise KeyError(f"room id {room.id} already registered")
            self._rooms[room.id] = room
            self._room_locks[room.id] = threading.Lock()
        return room

    def has_room(self, room_id: str) -> bool:
        return room_id in self._rooms

    def get_room(self, room_id: str) -> Optional[Room]:
        if not room_id or not isinstance(room_id, str):
            return None
        return self._rooms.get(room_id)

    def remove_room(self, room_id: str) -> Optional[Room]:
        with self._registry_lock:
            room = self._rooms.pop(room_id, None)
            self._room_locks.pop(room_id, None)
            for sid in [s.sid for s in self._sessions.values() if s.room_id == room_id]:
                self._sessions.pop(sid, None)
        return room

    def rooms(self) -> List[Room]:
        return list(self._rooms.values())

    def __len__(self) -> int:
        return len(self._rooms)

    @contextmanager
    def room_lock(self, room_id: str):
        """Serialize work on a single room.

        Raises RoomNotFound when the room is unknown or was removed while
        the caller waited for the lock.
        """
        lock = self._room_locks.get(room_id)
        if lock is None:
            raise RoomNotFound(room_id)
        with lock:
            if room_id not in self._rooms:
                raise RoomNotFound(room_id)
            yield

    def idle_rooms(self, ttl_sec: float, now: Optional[float] = None) -> List[Room]:
        now = time.monotonic() if now is None else now
        return [r for r in self.rooms() if now - r.last_activity_at > ttl_sec]

    # ---- sessions ----

    def bind_session(self, session: Session) -> Optional[Session]:
        """Record a session; return the one it replaced on the same connection."""
        with self._registry_lock:
            previous = self._sessions.get(session.sid)
            self._sessions[session.sid] = session
        return previous

    def get_session(self, sid: str) -> Optional[Session]:
        return self._sessions.get(sid)

    def discard_session(self, sid: str) -> Optional[Session]:
        with self._registry_lock:
            return self._sessions.pop(sid, None)

    def sessions_for_room(self, room_id: str) -> List[Session]:
        return [s for s in list(self._sessions.values()) if s.room_id == room_id]
