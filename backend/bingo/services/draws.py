import logging
import random
from typing import List, Optional, Tuple

from bingo.exceptions import AuthorizationError, ExhaustedError
from bingo.models import Room, Session, now_ms
from bingo.services.cards import MAX_NUMBER
from bingo.store import RoomStore

logger = logging.getLogger(__name__)


class DrawEngine:
    """Owns the per-room draw sequence. Only the room's host may change it."""

    def __init__(self, store: RoomStore, broadcaster, rooms, rng: Optional[random.Random] = None):
        self.store = store
        self.broadcaster = broadcaster
        self.rooms = rooms
        self.rng = rng or random

    def _host_room(self, room_id, session: Optional[Session], action) -> Room:
        if session is None or not session.is_host_of(room_id):
            raise AuthorizationError(f'Only the host can {action}')
        return self.rooms.get_room(room_id)

    def draw_number(self, room_id, session: Optional[Session]) -> Tuple[int, List[int], int]:
        room = self._host_room(room_id, session, 'draw numbers')
        with self.store.room_lock(room.id):
            drawn = room.drawn_numbers
            if len(drawn) >= MAX_NUMBER:
                raise ExhaustedError('All numbers have already been drawn')
            # The remaining pool is non-empty here, so the loop terminates
            seen = set(drawn)
            number = self.rng.randint(1, MAX_NUMBER)
            while number in seen:
                number = self.rng.randint(1, MAX_NUMBER)
            drawn.append(number)
            drawn.sort()
            room.last_drawn_at = now_ms()
            room.touch()
            total = len(drawn)
            self.broadcaster.to_room('numberDrawn', {
                'number': number,
                'drawnNumbers': list(drawn),
                'totalDrawn': total,
            }, room.id)
        logger.info(f"[number-drawn] room={room.id} number={number} total={total}")
        return number, list(drawn), total

    def reset_draw(self, room_id, session: Optional[Session]) -> Room:
        room = self._host_room(room_id, session, 'reset the draw')
        with self.store.room_lock(room.id):
            room.drawn_numbers = []
            room.last_drawn_at = None
            for participant in room.participants.values():
                participant.clear_marks()
            room.touch()
            self.broadcaster.to_room('drawReset', {'room': room.to_dict()}, room.id)
        logger.info(f"[draw-reset] room={room.id} participants={room.participant_count}")
        return room
