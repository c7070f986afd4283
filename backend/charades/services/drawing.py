"""Drawing stroke relay.

Strokes are persisted and echoed to subscribers as-is; nothing here merges
or orders them. Clients replay each event on their own surface.
"""

import logging
from numbers import Real
from typing import Any, Dict

from charades.errors import InvalidStroke, RoomNotFound, StoreError

logger = logging.getLogger(__name__)

STROKE_TYPES = ('start', 'draw', 'end', 'clear')
TOOLS = ('pen', 'pencil', 'eraser')
DEFAULT_COLOR = '#000000'
DEFAULT_SIZE = 5


def normalize_stroke(data) -> Dict[str, Any]:
    """Validate a stroke event and fill in defaults."""
    if not isinstance(data, dict):
        raise InvalidStroke('Stroke must be an object')
    kind = data.get('type')
    if kind not in STROKE_TYPES:
        raise InvalidStroke(f"Unknown stroke type: {kind!r}")
    if kind == 'clear':
        return {'type': 'clear'}

    stroke = {'type': kind}
    for axis in ('x', 'y'):
        value = data.get(axis)
        if value is None and kind == 'end':
            continue
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidStroke(f"Stroke needs a numeric {axis}")
        stroke[axis] = value

    tool = data.get('tool') or 'pen'
    if tool not in TOOLS:
        raise InvalidStroke(f"Unknown tool: {tool!r}")
    size = data.get('size', DEFAULT_SIZE)
    if isinstance(size, bool) or not isinstance(size, Real) or size <= 0:
        raise InvalidStroke('Stroke size must be a positive number')
    stroke.update({'color': data.get('color') or DEFAULT_COLOR, 'size': size, 'tool': tool})
    return stroke


def save_drawing_stroke(store, room_id, user_id, stroke) -> bool:
    """Persist a stroke so subscribers receive it. Storage failures are only logged."""
    event = normalize_stroke(stroke)
    if not store.get_room(room_id):
        raise RoomNotFound()
    try:
        store.add_stroke(room_id, user_id, event)
    except StoreError as exc:
        logger.warning(f"[stroke-drop] room={room_id} user={user_id} type={event['type']} error={exc}")
        return False
    return True


def clear_drawing(store, room_id, user_id) -> bool:
    """Wipe the room's strokes and tell every surface to clear."""
    if not store.get_room(room_id):
        raise RoomNotFound()
    try:
        removed = store.clear_strokes(room_id)
        store.add_stroke(room_id, user_id, {'type': 'clear'})
    except StoreError as exc:
        logger.warning(f"[canvas-clear-failed] room={room_id} error={exc}")
        return False
    logger.info(f"[canvas-clear] room={room_id} removed={removed}")
    return True


def stroke_style(stroke) -> Dict[str, Any]:
    tool = stroke.get('tool', 'pen')
    size = stroke.get('size', DEFAULT_SIZE)
    style = {
        'line_cap': 'round',
        'line_join': 'round',
        'composite': 'source-over',
        'alpha': 1.0,
        'color': stroke.get('color', DEFAULT_COLOR),
        'line_width': size,
    }
    if tool == 'eraser':
        style['composite'] = 'destination-out'
    elif tool == 'pencil':
        style['alpha'] = 0.7
        style['line_width'] = max(1, size - 1)
    return style


def apply_stroke(surface, stroke) -> None:
    """Replay one stroke event on a drawing surface.

    ``surface`` provides ``clear()``, ``begin_path()``, ``move_to(x, y)``,
    ``line_to(x, y)`` and ``stroke(style)``.
    """
    kind = stroke.get('type')
    if kind == 'clear':
        surface.clear()
    elif kind == 'start':
        surface.begin_path()
        surface.move_to(stroke['x'], stroke['y'])
    elif kind == 'draw':
        surface.line_to(stroke['x'], stroke['y'])
        surface.stroke(stroke_style(stroke))
