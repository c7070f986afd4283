import time
from typing import Set

from charades import socketio
from charades.store import STORE_KEY


_running_countdowns: Set[int] = set()


def tick(store, room_id: int, elapsed: int = 1):
    """Take ``elapsed`` off an active room's clock.

    Returns the remaining time, or None when the room is gone or idle.
    The clock stops at zero; what happens after that is left to clients.
    """
    room = store.get_room(room_id)
    if not room or not room.is_active:
        return None
    remaining = max(0, int(room.time_left or 0) - int(elapsed))
    if remaining != room.time_left:
        store.update_room(room_id, time_left=remaining)
    return remaining


def schedule_countdown(app, room_id: int) -> None:
    """Run the room clock on a background task, one tick per TIMER_TICK_SEC.

    - No-ops in TESTING mode
    - Ensures a single countdown per room
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_TIMER_IN_TESTS'):
        return
    if room_id in _running_countdowns:
        app.logger.info(f"[timer-skip] room={room_id} already counting down")
        return
    _running_countdowns.add(room_id)
    interval = float(app.config.get('TIMER_TICK_SEC', 1))
    store = app.extensions[STORE_KEY]
    app.logger.info(f"[timer-set] room={room_id} tick={interval}s")

    def _worker():
        # Whole seconds come off the clock; the fraction carries over
        carry = 0.0
        last = time.monotonic()
        try:
            while True:
                time.sleep(interval)
                now = time.monotonic()
                carry += now - last
                last = now
                elapsed = int(carry)
                if not elapsed:
                    continue
                carry -= elapsed
                with app.app_context():
                    remaining = tick(store, room_id, elapsed=elapsed)
                if remaining is None:
                    app.logger.info(f"[timer-abort] room={room_id} no longer active")
                    return
                if remaining == 0:
                    app.logger.info(f"[timer-done] room={room_id} time is up")
                    return
        finally:
            _running_countdowns.discard(room_id)

    socketio.start_background_task(_worker)
