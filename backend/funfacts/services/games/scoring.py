import logging
from dataclasses import dataclass, field
from typing import List

from .catalog import Catalog
from .items import ItemKey, ItemKind
from .state import SessionState
from .tiers import check_pet_tier, locked_count

logger = logging.getLogger(__name__)

FIRST_TRY_POINTS = 64


def points_for_attempt(attempt: int) -> int:
    """Points for a correct match on the item's *attempt*-th try.

    64, 32, 16, ... halving each try, never below 1.
    """
    if attempt < 1:
        raise ValueError(f'attempt must be >= 1, got {attempt}')
    return max(1, FIRST_TRY_POINTS >> (attempt - 1))


@dataclass
class ItemOutcome:
    key: ItemKey
    correct: bool
    attempt: int
    points: int = 0

    def to_dict(self):
        return {
            'key': self.key.to_dict(),
            'correct': self.correct,
            'attempt': self.attempt,
            'points': self.points,
        }


@dataclass
class RoundResult:
    corrected_count: int
    total_results: int
    locked_fact_count: int
    total_fact_count: int
    locked_pet_count: int
    total_pet_count: int
    score: int
    tier_unlocked: bool = False
    outcomes: List[ItemOutcome] = field(default_factory=list)

    @property
    def nothing_to_check(self) -> bool:
        return self.total_results == 0

    @property
    def locked_total(self) -> int:
        return self.locked_fact_count + self.locked_pet_count

    @property
    def item_total(self) -> int:
        return self.total_fact_count + self.total_pet_count

    @property
    def all_matched(self) -> bool:
        return self.item_total > 0 and self.locked_total == self.item_total

    def to_dict(self):
        return {
            'corrected_count': self.corrected_count,
            'total_results': self.total_results,
            'locked_fact_count': self.locked_fact_count,
            'total_fact_count': self.total_fact_count,
            'locked_pet_count': self.locked_pet_count,
            'total_pet_count': self.total_pet_count,
            'score': self.score,
            'tier_unlocked': self.tier_unlocked,
            'nothing_to_check': self.nothing_to_check,
            'outcomes': [o.to_dict() for o in self.outcomes],
        }


def submit_round(state: SessionState, catalog: Catalog) -> RoundResult:
    """Judge every placed, unlocked item and apply scoring.

    Items that were never placed sit the round out: they are neither wrong
    nor charged an attempt.
    """
    pets_open = state.pets_unlocked
    candidates = list(catalog.facts)
    if pets_open:
        candidates.extend(catalog.pets)

    outcomes = []
    for item in candidates:
        rec = state.assignments[item.key]
        if rec.locked:
            continue
        if item.kind is ItemKind.PET and not pets_open:
            continue
        if rec.placed_on is None:
            continue

        rec.attempt_count += 1
        if rec.placed_on == item.owner_name:
            pts = points_for_attempt(rec.attempt_count)
            state.score += pts
            rec.locked = True
            rec.marked_incorrect = False
            outcomes.append(ItemOutcome(item.key, True, rec.attempt_count, pts))
        else:
            rec.marked_incorrect = True
            outcomes.append(ItemOutcome(item.key, False, rec.attempt_count))

    unlocked = check_pet_tier(state, catalog)

    corrected = sum(1 for o in outcomes if o.correct)
    result = RoundResult(
        corrected_count=corrected,
        total_results=len(outcomes),
        locked_fact_count=locked_count(state, catalog.facts),
        total_fact_count=len(catalog.facts),
        locked_pet_count=locked_count(state, catalog.pets) if pets_open else 0,
        total_pet_count=len(catalog.pets) if pets_open else 0,
        score=state.score,
        tier_unlocked=unlocked,
        outcomes=outcomes,
    )
    logger.info(
        'round judged: %d/%d correct, %d/%d locked, score=%d',
        corrected, len(outcomes), result.locked_total, result.item_total, state.score,
    )
    return result
