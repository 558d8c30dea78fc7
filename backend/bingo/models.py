import time
import uuid
from typing import Dict, List, Optional


def now_ms() -> int:
    return int(time.time() * 1000)


def generate_room_id(length=8):
    """Generate a short, opaque room id."""
    return uuid.uuid4().hex[:length]


def generate_participant_id():
    return str(uuid.uuid4())


class Participant:
    def __init__(self, name, card, participant_id=None):
        self.id = participant_id or generate_participant_id()
        self.name = name
        # card is a BingoCard; numbers and layout never change after join
        self.card: List[int] = list(card.numbers)
        self.card_grid: List[Optional[int]] = list(card.grid)
        self.rows = card.rows
        self.cols = card.cols
        self.center_row = card.center_row
        self.center_col = card.center_col
        self.marked_numbers: List[int] = []
        self.bingo_announced = False
        self.joined_at = now_ms()

    @property
    def has_bingo(self) -> bool:
        return len(self.marked_numbers) == len(self.card)

    def clear_marks(self) -> None:
        self.marked_numbers = []
        self.bingo_announced = False

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'card': list(self.card),
            'cardGrid': list(self.card_grid),
            'rows': self.rows,
            'cols': self.cols,
            # Older clients read the geometry under these names
            'numbersPerRow': self.cols,
            'numbersPerCol': self.rows,
            'centerRow': self.center_row,
            'centerCol': self.center_col,
            'markedNumbers': list(self.marked_numbers),
            'joinedAt': self.joined_at,
        }


class Room:
    def __init__(self, host_name, card_size, room_id=None):
        self.id = room_id or generate_room_id()
        self.host_name = host_name
        self.card_size = card_size
        self.drawn_numbers: List[int] = []
        self.last_drawn_at: Optional[int] = None
        self.created_at = now_ms()
        self.participants: Dict[str, Participant] = {}
        self.last_activity_at = time.monotonic()

    def touch(self) -> None:
        self.last_activity_at = time.monotonic()

    @property
    def participant_count(self) -> int:
        return len(self.participants)

    def to_dict(self):
        return {
            'id': self.id,
            'hostName': self.host_name,
            'cardSize': self.card_size,
            'numbersPerCard': self.card_size,
            'drawnNumbers': list(self.drawn_numbers),
            'lastDrawnAt': self.last_drawn_at,
            'createdAt': self.created_at,
            'participants': {pid: p.to_dict() for pid, p in self.participants.items()},
            'participantCount': self.participant_count,
        }


class Session:
    """Routing metadata for one live connection."""

    def __init__(self, sid, user_id, room_id, is_host):
        self.sid = sid
        self.user_id = user_id
        self.room_id = room_id
        self.is_host = is_host

    def is_host_of(self, room_id) -> bool:
        return self.is_host and self.room_id == room_id

    def __repr__(self):
        role = 'host' if self.is_host else 'participant'
        return f"<Session {self.sid} {role} room={self.room_id} user={self.user_id}>"
