import logging

from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)


def _cors_origins(config):
    origins = config.get('CORS_ORIGINS') or ['*']
    return '*' if '*' in origins else origins


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    origins = _cors_origins(flask_app.config)
    CORS(flask_app, supports_credentials=True, origins=origins)
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    # One store and service bundle per app; handlers reach it through app.extensions
    from bingo.services import BingoServices
    from bingo.services.broadcast import SocketIOBroadcaster
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    services = BingoServices(
        SocketIOBroadcaster(socketio, namespace=namespace),
        default_card_size=flask_app.config.get('DEFAULT_CARD_SIZE', 24),
    )
    flask_app.extensions['bingo'] = services

    from bingo.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    @flask_app.route('/')
    def index():
        return jsonify({'message': 'Welcome to the bingo game server!'})

    @flask_app.route('/health')
    def health():
        return jsonify({'status': 'ok', 'rooms': len(services.store)})

    @flask_app.errorhandler(404)
    def not_found(_error):
        if request.path.startswith('/api'):
            return jsonify({'error': 'Route not found'}), 404
        return jsonify({'error': 'Not found'}), 404

    from bingo.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    from bingo.services.sweeper import start_room_sweeper
    start_room_sweeper(flask_app, services)

    @click.command('card-preview')
    @click.option('--size', default=None, type=int, help='Numbers per card.')
    def card_preview_command(size):
        """Generates a card and prints it as a B I N G O table."""
        from bingo.exceptions import ValidationError
        from bingo.services.cards import format_card, generate_card
        try:
            card = generate_card(size if size is not None else flask_app.config.get('DEFAULT_CARD_SIZE', 24))
        except ValidationError as exc:
            raise click.BadParameter(exc.message, param_hint='--size')
        click.echo(format_card(card))
        click.echo(f"{len(card.numbers)} numbers, {card.rows} rows, free cell at ({card.center_row}, {card.center_col})")

    flask_app.cli.add_command(card_preview_command)

    return flask_app
