"""Domain errors raised by the bingo services.

Routes and socket handlers turn these into a JSON error response or a
unicast ``error`` event; nothing here knows about the transport.
"""


class BingoError(Exception):
    """Base class for every game error."""
    status_code = 400

    def __init__(self, message):
        self.message = message
        super().__init__(message)


class ValidationError(BingoError):
    """A caller-supplied field is missing or invalid."""
    status_code = 400


class AuthorizationError(BingoError):
    """The action requires the host role."""
    status_code = 403


class NotFoundError(BingoError):
    """A room or participant id does not resolve."""
    status_code = 404


class RoomNotFound(NotFoundError):
    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__('Room not found')


class ParticipantNotFound(NotFoundError):
    def __init__(self, participant_id):
        self.participant_id = participant_id
        super().__init__('Participant not found in room')


class ExhaustedError(BingoError):
    """Every number has already been drawn."""
    status_code = 409
