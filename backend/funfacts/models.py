from funfacts import db
from funfacts.services.games import SessionState, new_session
from funfacts.services.games.narrator import WELCOME_TEXT
import json
import string
import random

def generate_game_code(length=4):
    """Generate a unique, short game code."""
    while True:
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        if not GameSession.query.filter_by(game_code=code).first():
            return code

class GameSession(db.Model):
    __tablename__ = 'game_session'
    id = db.Column(db.Integer, primary_key=True)
    game_code = db.Column(db.String(4), unique=True, index=True)
    score = db.Column(db.Integer, default=0, nullable=False)
    pets_unlocked = db.Column(db.Boolean, default=False, nullable=False)
    assignments = db.Column(db.Text, nullable=True)  # JSON-encoded list of assignment records
    round_history = db.Column(db.Text, nullable=True)  # JSON-encoded list of round summaries
    status_message = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    def __init__(self, **kwargs):
        super(GameSession, self).__init__(**kwargs)
        if not self.game_code:
            self.game_code = generate_game_code()
        if self.status_message is None:
            self.status_message = WELCOME_TEXT

    @classmethod
    def start(cls, catalog):
        game = cls()
        game.store_state(new_session(catalog))
        return game

    def load_state(self, catalog) -> SessionState:
        try:
            records = json.loads(self.assignments) if self.assignments else []
        except ValueError:
            records = []
        return SessionState.from_dict({
            'score': self.score,
            'pets_unlocked': self.pets_unlocked,
            'assignments': records,
        }, catalog)

    def store_state(self, state: SessionState) -> None:
        data = state.to_dict()
        self.score = data['score']
        self.pets_unlocked = data['pets_unlocked']
        self.assignments = json.dumps(data['assignments'])

    def history(self):
        try:
            return json.loads(self.round_history) if self.round_history else []
        except ValueError:
            return []

    def append_round(self, result, narration) -> None:
        history = self.history()
        history.append({
            'round': len(history) + 1,
            'corrected_count': result.corrected_count,
            'total_results': result.total_results,
            'score': result.score,
            'tier_unlocked': result.tier_unlocked,
            'outcomes': [o.to_dict() for o in result.outcomes],
            'narration': narration.kind.value,
        })
        self.round_history = json.dumps(history)

    def to_dict(self, snapshot=None):
        payload = {
            'id': self.id,
            'game_code': self.game_code,
            'score': self.score,
            'pets_unlocked': self.pets_unlocked,
            'status': self.status_message or '',
            'rounds_played': len(self.history()),
        }
        if snapshot is not None:
            payload['board'] = snapshot.to_dict()
        return payload
