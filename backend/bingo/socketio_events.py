import functools

from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from bingo import socketio
from bingo.exceptions import BingoError, ValidationError
from bingo.services import get_services


def _get_sid() -> str:
    # request.sid exists in a Socket.IO context
    return request.sid  # type: ignore


def _field(data, *names):
    for name in names:
        value = (data or {}).get(name)
        if value not in (None, ''):
            return value
    return None


def _require_room_id(data) -> str:
    room_id = _field(data, 'roomId')
    if not room_id:
        raise ValidationError('roomId is required')
    if not isinstance(room_id, str):
        raise ValidationError('roomId must be a string')
    return room_id


def unicast_errors(handler):
    """Report failures to the calling connection only, never to the room."""
    @functools.wraps(handler)
    def wrapper(*args, **kwargs):
        try:
            return handler(*args, **kwargs)
        except BingoError as exc:
            current_app.logger.info(f"[socket-error] event={handler.__name__} sid={_get_sid()} {exc.message}")
            emit('error', {'message': exc.message})
        except Exception:
            current_app.logger.exception(f"[socket-error] event={handler.__name__} sid={_get_sid()} unexpected failure")
            emit('error', {'message': 'Internal error'})
    return wrapper


def _subscribe(room_id, previous) -> None:
    # A connection follows one room at a time
    if previous and previous.room_id != room_id:
        leave_room(previous.room_id)
    join_room(room_id)


def handle_connect():
    emit('connected', {'sid': _get_sid()})


def handle_disconnect(*_args):
    get_services().rooms.unbind(_get_sid())


@unicast_errors
def handle_join_as_host(data):
    room_id = _require_room_id(data)
    room, previous = get_services().rooms.bind_host(_get_sid(), room_id, _field(data, 'userId', 'hostParticipantId'))
    _subscribe(room.id, previous)
    emit('roomJoined', {'room': room.to_dict(), 'isHost': True})


@unicast_errors
def handle_join_as_participant(data):
    room_id = _require_room_id(data)
    participant_id = _field(data, 'userId', 'participantId')
    room, participant, previous = get_services().rooms.bind_participant(_get_sid(), room_id, participant_id)
    _subscribe(room.id, previous)
    emit('roomJoined', {'room': room.to_dict(), 'isHost': False, 'participant': participant.to_dict()})


@unicast_errors
def handle_draw_number(data):
    services = get_services()
    room_id = _require_room_id(data)
    services.draws.draw_number(room_id, services.store.get_session(_get_sid()))


@unicast_errors
def handle_mark_number(data):
    room_id = _require_room_id(data)
    participant_id = _field(data, 'userId', 'participantId')
    number = (data or {}).get('number')
    get_services().marks.toggle_mark(room_id, participant_id, number, sid=_get_sid())


@unicast_errors
def handle_reset_draw(data):
    services = get_services()
    room_id = _require_room_id(data)
    services.draws.reset_draw(room_id, services.store.get_session(_get_sid()))


@unicast_errors
def handle_get_room_state(data):
    room_id = _require_room_id(data)
    room, is_host, participant = get_services().rooms.room_state(_get_sid(), room_id)
    payload = {'room': room.to_dict(), 'isHost': is_host}
    if participant is not None:
        payload['participant'] = participant.to_dict()
    emit('roomState', payload)


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('joinAsHost', handle_join_as_host, namespace=namespace)
    socketio.on_event('joinAsParticipant', handle_join_as_participant, namespace=namespace)
    socketio.on_event('drawNumber', handle_draw_number, namespace=namespace)
    socketio.on_event('markNumber', handle_mark_number, namespace=namespace)
    socketio.on_event('resetDraw', handle_reset_draw, namespace=namespace)
    socketio.on_event('getRoomState', handle_get_room_state, namespace=namespace)
    socketio.on_event('ping', handle_ping, namespace=namespace)
