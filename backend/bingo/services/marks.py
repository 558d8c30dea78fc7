import logging
from typing import List, Tuple

from bingo.exceptions import ValidationError
from bingo.store import RoomStore

logger = logging.getLogger(__name__)


def _coerce_number(value) -> int:
    if isinstance(value, bool):
        raise ValidationError('Number must be an integer')
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError('Number must be an integer')


class MarkEvaluator:
    """Toggles marks on a participant's card and announces full-card wins.

    A win is every card number marked; the free cell never counts. Marks are
    not checked against the numbers drawn so far.
    """

    def __init__(self, store: RoomStore, broadcaster, rooms):
        self.store = store
        self.broadcaster = broadcaster
        self.rooms = rooms

    def toggle_mark(self, room_id, participant_id, number, sid=None) -> Tuple[List[int], bool]:
        room = self.rooms.get_room(room_id)
        participant = self.rooms.get_participant(room, participant_id)
        number = _coerce_number(number)
        if number not in participant.card:
            raise ValidationError('Number is not on your card')

        with self.store.room_lock(room.id):
            marked = participant.marked_numbers
            if number in marked:
                marked.remove(number)
            else:
                marked.append(number)
            has_bingo = participant.has_bingo
            announce = has_bingo and not participant.bingo_announced
            if announce:
                participant.bingo_announced = True
            room.touch()

            self.broadcaster.to_connection('numberMarked', {
                'number': number,
                'markedNumbers': list(marked),
                'hasBingo': has_bingo,
            }, sid)
            if announce:
                self.broadcaster.to_room('bingo', {
                    'participantId': participant.id,
                    'participantName': participant.name,
                }, room.id)

        if announce:
            logger.info(f"[bingo] room={room.id} participant={participant.id} name={participant.name!r}")
        return list(marked), has_bingo
