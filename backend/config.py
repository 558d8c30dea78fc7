import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Numbers per card when the host does not pick one
    DEFAULT_CARD_SIZE = int(os.environ.get('DEFAULT_CARD_SIZE', '24'))
    # Comma separated list of allowed origins; '*' allows any
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Drop rooms idle for this long (sec). 0 disables.
    ROOM_TTL_SEC = int(os.environ.get('ROOM_TTL_SEC', '0'))
    ROOM_SWEEP_INTERVAL_SEC = int(os.environ.get('ROOM_SWEEP_INTERVAL_SEC', '60'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
