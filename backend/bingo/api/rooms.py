from flask import Blueprint, jsonify, request, current_app

from bingo.exceptions import BingoError
from bingo.services import get_services


rooms = Blueprint('rooms', __name__)


@rooms.errorhandler(BingoError)
def handle_bingo_error(exc):
    current_app.logger.info(f"[api-error] {request.method} {request.path} -> {exc.status_code} {exc.message}")
    return jsonify({'error': exc.message}), exc.status_code


@rooms.route('', methods=['POST'])
def create_room():
    data = request.get_json(silent=True) or {}
    # numbersPerCard is the field name older clients send
    card_size = data.get('cardSize', data.get('numbersPerCard'))
    room = get_services().rooms.create_room(data.get('hostName'), card_size)
    return jsonify({'roomId': room.id, 'room': room.to_dict()}), 201


@rooms.route('/<string:room_id>', methods=['GET'])
def get_room(room_id):
    room = get_services().rooms.get_room(room_id)
    return jsonify(room.to_dict())


@rooms.route('/<string:room_id>/join', methods=['POST'])
def join_room(room_id):
    data = request.get_json(silent=True) or {}
    participant_id, participant, room = get_services().rooms.join_room(room_id, data.get('participantName'))
    return jsonify({
        'participantId': participant_id,
        'userId': participant_id,
        'room': room.to_dict(),
        'participant': participant.to_dict(),
    }), 201
