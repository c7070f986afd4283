"""Game errors surfaced to clients as ``{"error": message}`` responses."""


class CharadesError(Exception):
    status_code = 400
    message = 'Something went wrong'

    def __init__(self, message=None):
        super().__init__(message or self.message)

    def to_dict(self):
        return {'error': str(self)}


class RoomNotFound(CharadesError):
    status_code = 404
    message = 'Room not found'


class UserNotFound(CharadesError):
    status_code = 404
    message = 'User not found'


class GameAlreadyStarted(CharadesError):
    status_code = 409
    message = 'Game is already in progress'


class RoomFull(CharadesError):
    status_code = 409
    message = 'Room is full'


class AlreadyInRoom(CharadesError):
    status_code = 409
    message = 'You are already in this room'


class NotRoomHost(CharadesError):
    status_code = 403
    message = 'Only the host can start the game'


class GuessNotAllowed(CharadesError):
    status_code = 403
    message = 'You cannot guess right now'


class NotEnoughPlayers(CharadesError):
    message = 'Need at least 2 players to start'


class NoAvailableRooms(CharadesError):
    status_code = 404
    message = 'No available rooms found. Try creating a new room or joining with a specific code.'


class InvalidStroke(CharadesError):
    message = 'Invalid drawing stroke'


class UsernameTaken(CharadesError):
    message = 'Username is already taken'


class InvalidCredentials(CharadesError):
    status_code = 401
    message = 'Invalid username or password'


class StoreError(CharadesError):
    """The storage backend failed to read or write."""
    status_code = 503
    message = 'Storage unavailable'
