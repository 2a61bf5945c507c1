from dataclasses import dataclass
from enum import Enum

from .scoring import RoundResult

WELCOME_TEXT = 'Match the fun facts to unlock pets, then press Submit.'
LOAD_FAILED_TEXT = 'Failed to load data. Check server.'


class NarrationKind(str, Enum):
    TIER_UNLOCKED = 'tier_unlocked'
    NOTHING_TO_CHECK = 'nothing_to_check'
    ALL_MATCHED = 'all_matched'
    PROGRESS = 'progress'
    NO_CORRECT = 'no_correct'


@dataclass(frozen=True)
class Narration:
    kind: NarrationKind
    text: str

    def to_dict(self):
        return {'kind': self.kind.value, 'text': self.text}


def narrate(result: RoundResult) -> Narration:
    """Status line for a finished round. First matching case wins."""
    if result.tier_unlocked:
        return Narration(NarrationKind.TIER_UNLOCKED, 'Congrats! Hard mode unlocked!')
    if result.nothing_to_check:
        return Narration(NarrationKind.NOTHING_TO_CHECK, 'Nothing to check. Drag cards onto people.')
    if result.all_matched:
        return Narration(NarrationKind.ALL_MATCHED, f'All matched! Final score: {result.score}')
    if result.corrected_count > 0:
        return Narration(
            NarrationKind.PROGRESS,
            f'Nice! {result.corrected_count} correct this round. '
            f'{result.locked_total}/{result.item_total} locked.',
        )
    return Narration(NarrationKind.NO_CORRECT, 'No correct matches that round. Try again!')
