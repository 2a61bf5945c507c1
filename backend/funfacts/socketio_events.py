from flask_socketio import join_room, leave_room, emit
from funfacts import socketio
from funfacts.models import GameSession


def _game_code(data):
    """Upper-cased game code from an event payload, or None after emitting an error."""
    game_code = data.get('game_code') if isinstance(data, dict) else None
    if not isinstance(game_code, str) or not game_code.strip():
        emit('error', {'message': 'game_code is required'})
        return None
    return game_code.strip().upper()


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_game(data):
    game_code = _game_code(data)
    if game_code is None:
        return
    game = GameSession.query.filter_by(game_code=game_code).first()
    if not game:
        emit('error', {'message': f'Game {game_code} not found'})
        return
    room = f"game:{game_code}"
    join_room(room)
    # Late joiners get the current score and status line right away
    emit('joined', {'room': room, 'game': game.to_dict()})


def handle_leave_game(data):
    game_code = _game_code(data)
    if game_code is None:
        return
    room = f"game:{game_code}"
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    handlers = {
        'connect': handle_connect,
        'join_game': handle_join_game,
        'leave_game': handle_leave_game,
        'ping': handle_ping,
    }
    for event, handler in handlers.items():
        socketio.on_event(event, handler, namespace='/ws')

    if testing:
        for event, handler in handlers.items():
            socketio.on_event(event, handler, namespace='/')
