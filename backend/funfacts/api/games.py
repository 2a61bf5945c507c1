from flask import Blueprint, jsonify, request, current_app
from funfacts import db, socketio
from funfacts.catalog import get_catalog
from funfacts.models import GameSession
from funfacts.services.games import CatalogLoadError, GameEngine, ItemKey
from funfacts.services.games.narrator import LOAD_FAILED_TEXT, WELCOME_TEXT
import threading
import weakref


games = Blueprint('games', __name__)

# One lock per existing game code: load -> mutate -> store must not interleave.
# Entries vanish once no request holds the lock.
_game_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
_game_locks_guard = threading.Lock()

def _lock_for(game_code: str) -> threading.Lock:
    # 404 before a lock is ever created for a code
    GameSession.query.filter_by(game_code=game_code).first_or_404()
    with _game_locks_guard:
        return _game_locks.setdefault(game_code, threading.Lock())

def _load(game_code: str):
    game = GameSession.query.filter_by(game_code=game_code).first_or_404()
    catalog = get_catalog()
    return game, GameEngine(catalog, game.load_state(catalog))

def _emit_update(game_code: str) -> None:
    socketio.emit('state_update', {'game_code': game_code}, to=f"game:{game_code}", namespace='/ws')

def _parse_item(data):
    if not isinstance(data, dict):
        return None, (jsonify({'error': 'request body must be a JSON object'}), 400)
    try:
        return ItemKey.from_dict(data.get('item')), None
    except ValueError as exc:
        return None, (jsonify({'error': str(exc)}), 400)


@games.errorhandler(CatalogLoadError)
def handle_load_error(exc):
    current_app.logger.error(f"[catalog] load failed: {exc}")
    return jsonify({'error': LOAD_FAILED_TEXT, 'detail': str(exc)}), 503


@games.route('/create', methods=['POST'])
def create_game():
    catalog = get_catalog()
    game = GameSession.start(catalog)
    db.session.add(game)
    db.session.commit()
    current_app.logger.info(f"[create] game={game.game_code} facts={len(catalog.facts)} pets={len(catalog.pets)}")
    engine = GameEngine(catalog, game.load_state(catalog))
    payload = game.to_dict(engine.snapshot())
    payload['message'] = 'New game created!'
    return jsonify(payload), 201


@games.route('/<string:game_code>/state', methods=['GET'])
def get_game_state(game_code):
    game, engine = _load(game_code.upper())
    payload = game.to_dict(engine.snapshot())
    payload['round_history'] = game.history()
    return jsonify(payload)


@games.route('/<string:game_code>/place', methods=['POST'])
def place_item(game_code):
    data = request.get_json(silent=True) or {}
    key, error = _parse_item(data)
    if error:
        return error
    person = data.get('person')
    if not isinstance(person, str) or not person:
        return jsonify({'error': 'person is required'}), 400

    code = game_code.upper()
    with _lock_for(code):
        game, engine = _load(code)
        applied = engine.place(key, person)
        if applied:
            game.store_state(engine.state)
            game.status_message = ''
            db.session.add(game)
            db.session.commit()
        else:
            current_app.logger.debug(f"[place] game={code} ignored item={key} person={person!r}")
        payload = game.to_dict(engine.snapshot())
    if applied:
        _emit_update(code)
    payload['applied'] = applied
    return jsonify(payload)


@games.route('/<string:game_code>/unplace', methods=['POST'])
def unplace_item(game_code):
    data = request.get_json(silent=True) or {}
    key, error = _parse_item(data)
    if error:
        return error

    code = game_code.upper()
    with _lock_for(code):
        game, engine = _load(code)
        applied = engine.unplace(key)
        if applied:
            game.store_state(engine.state)
            game.status_message = ''
            db.session.add(game)
            db.session.commit()
        payload = game.to_dict(engine.snapshot())
    if applied:
        _emit_update(code)
    payload['applied'] = applied
    return jsonify(payload)


@games.route('/<string:game_code>/submit', methods=['POST'])
def submit_round(game_code):
    code = game_code.upper()
    with _lock_for(code):
        game, engine = _load(code)
        result, narration = engine.submit_round()
        game.store_state(engine.state)
        game.status_message = narration.text
        game.append_round(result, narration)
        db.session.add(game)
        db.session.commit()
        current_app.logger.info(
            f"[submit] game={code} correct={result.corrected_count}/{result.total_results} "
            f"score={result.score} narration={narration.kind.value}"
        )
        payload = game.to_dict(engine.snapshot())
    _emit_update(code)
    payload['result'] = result.to_dict()
    payload['narration'] = narration.to_dict()
    return jsonify(payload)


@games.route('/<string:game_code>/reset', methods=['POST'])
def reset_game(game_code):
    code = game_code.upper()
    with _lock_for(code):
        game, engine = _load(code)
        engine.reset()
        game.store_state(engine.state)
        game.status_message = WELCOME_TEXT
        game.round_history = None
        db.session.add(game)
        db.session.commit()
        current_app.logger.info(f"[reset] game={code}")
        payload = game.to_dict(engine.snapshot())
    _emit_update(code)
    return jsonify(payload)
