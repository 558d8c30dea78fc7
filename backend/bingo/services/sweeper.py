from bingo import socketio


def start_room_sweeper(app, services) -> bool:
    """Periodically drop rooms that have been idle longer than ROOM_TTL_SEC.

    - No-ops in TESTING mode or when ROOM_TTL_SEC is 0
    - Runs as a Socket.IO background task so it cooperates with the async mode
    """
    if app.config.get('TESTING'):
        return False
    ttl = int(app.config.get('ROOM_TTL_SEC', 0))
    if ttl <= 0:
        return False
    interval = max(1, int(app.config.get('ROOM_SWEEP_INTERVAL_SEC', 60)))

    def _worker():
        while True:
            socketio.sleep(interval)
            try:
                removed = services.rooms.purge_expired(ttl)
            except Exception:
                app.logger.exception("[sweep-failed] room expiry sweep raised")
                continue
            if removed:
                app.logger.info(f"[sweep] removed={removed} remaining={len(services.store)}")

    app.logger.info(f"[sweep-start] ttl={ttl}s interval={interval}s")
    socketio.start_background_task(_worker)
    return True
