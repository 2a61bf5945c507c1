"""Catalog contract and loading.

A catalog source hands over three plain lists (people, facts, pets). All
three must resolve before a :class:`Catalog` exists; anything going wrong
along the way surfaces as a single :class:`CatalogLoadError`.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Protocol, Tuple

from .errors import CatalogLoadError
from .items import Fact, Item, ItemKey, ItemKind, Person, Pet

logger = logging.getLogger(__name__)


class CatalogSource(Protocol):
    def people(self) -> List[dict]: ...

    def facts(self) -> List[dict]: ...

    def pets(self) -> List[dict]: ...


class StaticCatalogSource:
    """Serves catalog lists that are already in memory."""

    def __init__(self, people=None, facts=None, pets=None):
        self._people = list(people or [])
        self._facts = list(facts or [])
        self._pets = list(pets or [])

    def people(self):
        return list(self._people)

    def facts(self):
        return list(self._facts)

    def pets(self):
        return list(self._pets)


@dataclass
class Catalog:
    people: List[Person] = field(default_factory=list)
    facts: List[Fact] = field(default_factory=list)
    pets: List[Pet] = field(default_factory=list)

    def __post_init__(self):
        self._items: Dict[ItemKey, Item] = {item.key: item for item in self.items()}
        self._names = {p.name for p in self.people}

    def items(self) -> Iterator[Item]:
        yield from self.facts
        yield from self.pets

    def item(self, key: ItemKey) -> Optional[Item]:
        return self._items.get(key)

    def has_person(self, name) -> bool:
        return name in self._names

    def items_of(self, kind: ItemKind) -> List[Item]:
        return list(self.facts) if kind is ItemKind.FACT else list(self.pets)

    def to_dict(self):
        return {
            'people': [p.to_dict() for p in self.people],
            'facts': [f.to_dict() for f in self.facts],
            'pets': [p.to_dict() for p in self.pets],
        }


def _text(value) -> str:
    return '' if value is None else str(value).strip()


def _build_facts(rows) -> List[Fact]:
    facts = []
    seen = set()
    for row in rows:
        fact = Fact(id=int(row['id']), owner_name=_text(row.get('name')), text=_text(row.get('fact')))
        if fact.id in seen:
            raise CatalogLoadError(f'duplicate fact id {fact.id}')
        seen.add(fact.id)
        facts.append(fact)
    return facts


def _build_pets(rows) -> List[Pet]:
    pets = []
    seen = set()
    for row in rows:
        pet = Pet(
            id=int(row['id']),
            owner_name=_text(row.get('owner')),
            display_name=_text(row.get('name')),
            image_ref=row.get('image') or None,
        )
        if pet.id in seen:
            raise CatalogLoadError(f'duplicate pet id {pet.id}')
        seen.add(pet.id)
        pets.append(pet)
    return pets


def _roster_sort_key(person: Person) -> Tuple[str, str]:
    return (person.name.casefold(), person.name)


def build_roster(people_rows, facts: List[Fact], pets: List[Pet]) -> List[Person]:
    """Union of pictured people, fact owners and pet owners, sorted by name."""
    images: Dict[str, Optional[str]] = {}
    for row in people_rows:
        name = _text(row.get('name'))
        if name and name not in images:
            images[name] = row.get('image') or None
    names = set(images)
    names.update(f.owner_name for f in facts)
    names.update(p.owner_name for p in pets)
    names.discard('')
    return sorted((Person(name, images.get(name)) for name in names), key=_roster_sort_key)


def load_catalog(source: CatalogSource) -> Catalog:
    """Resolve all three lists from *source* and build a Catalog.

    Raises CatalogLoadError if any list fails to resolve or is malformed.
    """
    try:
        people_rows = source.people()
        fact_rows = source.facts()
        pet_rows = source.pets()
        facts = _build_facts(fact_rows)
        pets = _build_pets(pet_rows)
        roster = build_roster(people_rows, facts, pets)
    except CatalogLoadError:
        raise
    except Exception as exc:
        raise CatalogLoadError(f'failed to load catalog: {exc}') from exc
    catalog = Catalog(people=roster, facts=facts, pets=pets)
    logger.info('catalog loaded: %d people, %d facts, %d pets', len(roster), len(facts), len(pets))
    return catalog
