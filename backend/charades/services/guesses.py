import logging
from dataclasses import dataclass

from charades.errors import GuessNotAllowed, RoomNotFound

logger = logging.getLogger(__name__)

MIN_POINTS = 10
MAX_GUESS_LENGTH = 255


@dataclass
class GuessResult:
    is_correct: bool
    points: int

    def to_dict(self):
        return {'is_correct': self.is_correct, 'points': self.points}


def is_correct_guess(text, word) -> bool:
    if not word:
        return False
    return (text or '').strip().casefold() == word.strip().casefold()


def guess_points(time_left) -> int:
    """Faster guesses are worth more, never less than MIN_POINTS."""
    return max(MIN_POINTS, int(time_left or 0) // 10)


def submit_guess(store, room_id, user_id, text) -> GuessResult:
    """Record a guess from a player in an active room who is not drawing.

    Wrong guesses are kept as chat. A correct one scores the player and
    their lifetime stats, after which they cannot guess again this round.
    """
    room = store.get_room(room_id)
    if not room:
        raise RoomNotFound()
    if not room.is_active:
        raise GuessNotAllowed('The game has not started yet')
    player = store.get_player(room_id, user_id)
    if not player:
        raise GuessNotAllowed('You are not in this room')
    if player.is_drawing or room.current_drawer_id == user_id:
        raise GuessNotAllowed('The drawer cannot guess')
    if player.has_guessed:
        raise GuessNotAllowed('You already guessed the word')

    correct = is_correct_guess(text, room.current_word)
    points = guess_points(room.time_left) if correct else 0
    store.add_guess(room_id, user_id, (text or '').strip(), correct)

    if correct:
        store.increment_player_score(room_id, user_id, points)
        store.update_player(room_id, user_id, has_guessed=True)
        store.update_user_stats(user_id, points)
        logger.info(f"[guess-correct] room={room_id} user={user_id} points={points} time_left={room.time_left}")
    return GuessResult(is_correct=correct, points=points)


def list_guesses(store, room_id):
    return store.list_guesses(room_id)
