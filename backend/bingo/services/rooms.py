import logging
from typing import Optional, Tuple

from bingo.exceptions import ParticipantNotFound, RoomNotFound, ValidationError
from bingo.models import Participant, Room, Session, generate_room_id
from bingo.services.cards import generate_card, validate_card_size
from bingo.store import RoomStore

logger = logging.getLogger(__name__)


def _require_name(value, field):
    name = value.strip() if isinstance(value, str) else ''
    if not name:
        raise ValidationError(f'{field} is required')
    return name


class RoomLifecycle:
    """Creates rooms, admits participants and binds connections to rooms."""

    def __init__(self, store: RoomStore, broadcaster, default_card_size=24):
        self.store = store
        self.broadcaster = broadcaster
        self.default_card_size = default_card_size

    def create_room(self, host_name, card_size=None) -> Room:
        host_name = _require_name(host_name, 'Host name')
        card_size = validate_card_size(self.default_card_size if card_size is None else card_size)

        room_id = generate_room_id()
        while self.store.has_room(room_id):
            logger.warning(f"[room-id-collision] regenerating id {room_id}")
            room_id = generate_room_id()
        room = self.store.add_room(Room(host_name, card_size, room_id=room_id))
        logger.info(f"[room-created] room={room.id} host={host_name!r} card_size={card_size}")
        return room

    def get_room(self, room_id) -> Room:
        room = self.store.get_room(room_id)
        if room is None:
            raise RoomNotFound(room_id)
        return room

    def get_participant(self, room: Room, participant_id) -> Participant:
        if participant_id is not None and not isinstance(participant_id, str):
            raise ValidationError('Participant id must be a string')
        participant = room.participants.get(participant_id) if participant_id else None
        if participant is None:
            raise ParticipantNotFound(participant_id)
        return participant

    def join_room(self, room_id, participant_name) -> Tuple[str, Participant, Room]:
        participant_name = _require_name(participant_name, 'Participant name')
        room = self.get_room(room_id)
        with self.store.room_lock(room.id):
            participant = Participant(participant_name, generate_card(room.card_size))
            room.participants[participant.id] = participant
            room.touch()
            self.broadcaster.to_room('participantJoined', {
                'participant': participant.to_dict(),
                'participantCount': room.participant_count,
            }, room.id)
        logger.info(f"[participant-joined] room={room.id} participant={participant.id} name={participant_name!r}")
        return participant.id, participant, room

    # ---- connection sessions ----

    def bind_host(self, sid, room_id, user_id) -> Tuple[Room, Optional[Session]]:
        room = self.get_room(room_id)
        previous = self.store.bind_session(Session(sid, user_id, room.id, is_host=True))
        room.touch()
        logger.info(f"[session-bound] sid={sid} host={user_id} room={room.id}")
        return room, previous

    def bind_participant(self, sid, room_id, participant_id) -> Tuple[Room, Participant, Optional[Session]]:
        room = self.get_room(room_id)
        participant = self.get_participant(room, participant_id)
        previous = self.store.bind_session(Session(sid, participant.id, room.id, is_host=False))
        room.touch()
        logger.info(f"[session-bound] sid={sid} participant={participant.id} room={room.id}")
        return room, participant, previous

    def unbind(self, sid) -> Optional[Session]:
        session = self.store.discard_session(sid)
        if session:
            logger.info(f"[session-closed] sid={sid} room={session.room_id}")
        return session

    def room_state(self, sid, room_id) -> Tuple[Room, bool, Optional[Participant]]:
        room = self.get_room(room_id)
        session = self.store.get_session(sid)
        is_host = bool(session and session.is_host_of(room.id))
        participant = None
        if session and not session.is_host and session.room_id == room.id:
            participant = room.participants.get(session.user_id)
        return room, is_host, participant

    def purge_expired(self, ttl_sec) -> int:
        """Drop rooms idle longer than ``ttl_sec`` along with their sessions."""
        if not ttl_sec or ttl_sec <= 0:
            return 0
        removed = 0
        for room in self.store.idle_rooms(ttl_sec):
            try:
                with self.store.room_lock(room.id):
                    self.store.remove_room(room.id)
            except RoomNotFound:
                continue
            removed += 1
            logger.info(f"[room-expired] room={room.id} participants={room.participant_count}")
        return removed
