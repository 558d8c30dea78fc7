"""Bingo domain services: cards, room lifecycle, draws and marks.

HTTP routes and socket handlers import from here, keeping transport
concerns separated from the game rules. One ``BingoServices`` bundle is
built per application and kept in ``app.extensions['bingo']``.
"""

from flask import current_app

from bingo.services.draws import DrawEngine
from bingo.services.marks import MarkEvaluator
from bingo.services.rooms import RoomLifecycle
from bingo.store import RoomStore


class BingoServices:
    def __init__(self, broadcaster, store=None, default_card_size=24):
        self.store = store or RoomStore()
        self.broadcaster = broadcaster
        self.rooms = RoomLifecycle(self.store, broadcaster, default_card_size=default_card_size)
        self.draws = DrawEngine(self.store, broadcaster, self.rooms)
        self.marks = MarkEvaluator(self.store, broadcaster, self.rooms)


def get_services() -> BingoServices:
    return current_app.extensions['bingo']
