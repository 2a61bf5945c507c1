"""Session state and the assignment store operations.

Placement rules:

- locked items never move again
- a person holds at most one fact; placing a fact evicts the unlocked fact
  already there, and is refused if that fact is locked
- pets can only be placed once the pet tier is unlocked

Every rule violation is a silent no-op (the operation returns False).
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .catalog import Catalog
from .items import Item, ItemKey, ItemKind

logger = logging.getLogger(__name__)


@dataclass
class AssignmentRecord:
    placed_on: Optional[str] = None
    attempt_count: int = 0
    locked: bool = False
    marked_incorrect: bool = False

    def to_dict(self):
        return {
            'placed_on': self.placed_on,
            'attempt_count': self.attempt_count,
            'locked': self.locked,
            'marked_incorrect': self.marked_incorrect,
        }


@dataclass
class SessionState:
    assignments: Dict[ItemKey, AssignmentRecord] = field(default_factory=dict)
    score: int = 0
    pets_unlocked: bool = False

    def record(self, key: ItemKey) -> Optional[AssignmentRecord]:
        return self.assignments.get(key)

    def to_dict(self):
        return {
            'score': self.score,
            'pets_unlocked': self.pets_unlocked,
            'assignments': [
                dict(key.to_dict(), **rec.to_dict()) for key, rec in self.assignments.items()
            ],
        }

    @classmethod
    def from_dict(cls, data, catalog: Catalog) -> 'SessionState':
        """Rebuild a state against *catalog*.

        Records for items the catalog no longer has are dropped, new catalog
        items start unplaced, and unlocked placements onto people who left
        the roster are cleared.
        """
        state = new_session(catalog)
        data = data or {}
        state.score = max(0, int(data.get('score') or 0))
        state.pets_unlocked = state.pets_unlocked or bool(data.get('pets_unlocked'))
        for entry in data.get('assignments') or []:
            try:
                key = ItemKey.from_dict(entry)
            except ValueError:
                continue
            if key not in state.assignments:
                continue
            rec = AssignmentRecord(
                placed_on=entry.get('placed_on') or None,
                attempt_count=max(0, int(entry.get('attempt_count') or 0)),
                locked=bool(entry.get('locked')),
                marked_incorrect=bool(entry.get('marked_incorrect')),
            )
            if rec.locked and rec.placed_on is None:
                rec.locked = False
            if rec.locked:
                rec.marked_incorrect = False
            elif rec.placed_on is not None and not catalog.has_person(rec.placed_on):
                rec.placed_on = None
                rec.marked_incorrect = False
            state.assignments[key] = rec
        return state


def new_session(catalog: Catalog) -> SessionState:
    """Fresh state: everything unplaced, score 0, pets unlocked only if there are no facts."""
    return SessionState(
        assignments={item.key: AssignmentRecord() for item in catalog.items()},
        score=0,
        pets_unlocked=not catalog.facts,
    )


def _fact_on(state: SessionState, catalog: Catalog, person_name: str, exclude: ItemKey) -> Optional[ItemKey]:
    for fact in catalog.facts:
        if fact.key == exclude:
            continue
        rec = state.assignments[fact.key]
        if rec.placed_on == person_name:
            return fact.key
    return None


def place(state: SessionState, catalog: Catalog, key: ItemKey, person_name: str) -> bool:
    item = catalog.item(key)
    rec = state.record(key)
    if item is None or rec is None:
        logger.debug('place ignored: unknown item %s', key)
        return False
    if rec.locked:
        logger.debug('place ignored: %s is locked', key)
        return False
    if not catalog.has_person(person_name):
        logger.debug('place ignored: unknown person %r', person_name)
        return False
    if key.kind is ItemKind.PET and not state.pets_unlocked:
        logger.debug('place ignored: pets are locked (%s)', key)
        return False

    if key.kind is ItemKind.FACT:
        occupant = _fact_on(state, catalog, person_name, exclude=key)
        if occupant is not None:
            occupant_rec = state.assignments[occupant]
            if occupant_rec.locked:
                logger.debug('place ignored: %s already locked on %r', occupant, person_name)
                return False
            occupant_rec.placed_on = None
            occupant_rec.marked_incorrect = False

    rec.placed_on = person_name
    rec.marked_incorrect = False
    return True


def unplace(state: SessionState, key: ItemKey) -> bool:
    rec = state.record(key)
    if rec is None or rec.locked or rec.placed_on is None:
        return False
    rec.placed_on = None
    rec.marked_incorrect = False
    return True


@dataclass
class PlacedCard:
    item: Item
    locked: bool
    incorrect: bool

    def to_dict(self):
        return dict(self.item.to_card(), locked=self.locked, incorrect=self.incorrect)


@dataclass
class PersonSlot:
    name: str
    image_ref: Optional[str]
    items: List[PlacedCard] = field(default_factory=list)

    def to_dict(self):
        return {
            'name': self.name,
            'image': self.image_ref,
            'items': [card.to_dict() for card in self.items],
        }


@dataclass
class RenderModel:
    unplaced_facts: List[Item]
    unplaced_pets: List[Item]
    people: List[PersonSlot]
    score: int
    pets_unlocked: bool

    def slot(self, name) -> Optional[PersonSlot]:
        for person in self.people:
            if person.name == name:
                return person
        return None

    def to_dict(self):
        return {
            'unplaced_facts': [item.to_card() for item in self.unplaced_facts],
            'unplaced_pets': [item.to_card() for item in self.unplaced_pets],
            'people': [p.to_dict() for p in self.people],
            'score': self.score,
            'pets_unlocked': self.pets_unlocked,
        }


def snapshot(state: SessionState, catalog: Catalog) -> RenderModel:
    slots = {p.name: PersonSlot(p.name, p.image_ref) for p in catalog.people}
    unplaced = {ItemKind.FACT: [], ItemKind.PET: []}
    for key, rec in state.assignments.items():
        item = catalog.item(key)
        if item is None:
            continue
        if rec.placed_on is None:
            unplaced[key.kind].append(item)
            continue
        slot = slots.get(rec.placed_on)
        if slot is None:
            # locked on someone who has since left the roster
            slot = slots[rec.placed_on] = PersonSlot(rec.placed_on, None)
        slot.items.append(PlacedCard(item, rec.locked, rec.marked_incorrect and not rec.locked))
    return RenderModel(
        unplaced_facts=unplaced[ItemKind.FACT],
        unplaced_pets=unplaced[ItemKind.PET],
        people=list(slots.values()),
        score=state.score,
        pets_unlocked=state.pets_unlocked,
    )
