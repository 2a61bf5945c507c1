"""Catalog entities: people and the two kinds of draggable item."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ItemKind(str, Enum):
    FACT = 'fact'
    PET = 'pet'


@dataclass(frozen=True)
class ItemKey:
    """Composite (kind, id) key, unique across facts and pets."""

    kind: ItemKind
    id: int

    @classmethod
    def from_dict(cls, data) -> 'ItemKey':
        """Parse the ``{"kind": "fact", "id": 3}`` wire form.

        Raises ValueError for anything malformed; an unknown *id* is not an
        error here, the engine treats it as a no-op.
        """
        if not isinstance(data, dict):
            raise ValueError('item must be an object with kind and id')
        try:
            kind = ItemKind(data.get('kind'))
        except ValueError:
            raise ValueError(f"unknown item kind: {data.get('kind')!r}") from None
        raw_id = data.get('id')
        if isinstance(raw_id, bool) or not isinstance(raw_id, (int, str)):
            raise ValueError('item id must be an integer')
        try:
            item_id = int(raw_id)
        except ValueError:
            raise ValueError(f'item id must be an integer, got {raw_id!r}') from None
        return cls(kind, item_id)

    def to_dict(self):
        return {'kind': self.kind.value, 'id': self.id}

    def __str__(self):
        return f'{self.kind.value}:{self.id}'


@dataclass(frozen=True)
class Person:
    name: str
    image_ref: Optional[str] = None

    def to_dict(self):
        return {'name': self.name, 'image': self.image_ref}


@dataclass(frozen=True)
class Fact:
    id: int
    owner_name: str
    text: str

    kind = ItemKind.FACT

    @property
    def key(self) -> ItemKey:
        return ItemKey(ItemKind.FACT, self.id)

    def to_dict(self):
        # Catalog contract shape: {id, name, fact}
        return {'id': self.id, 'name': self.owner_name, 'fact': self.text}

    def to_card(self):
        return {'key': self.key.to_dict(), 'text': self.text or '(No fact)'}


@dataclass(frozen=True)
class Pet:
    id: int
    owner_name: str
    display_name: str
    image_ref: Optional[str] = None

    kind = ItemKind.PET

    @property
    def key(self) -> ItemKey:
        return ItemKey(ItemKind.PET, self.id)

    def to_dict(self):
        # Catalog contract shape: {id, owner, name, image}
        return {'id': self.id, 'owner': self.owner_name, 'name': self.display_name, 'image': self.image_ref}

    def to_card(self):
        return {'key': self.key.to_dict(), 'name': self.display_name, 'image': self.image_ref}


Item = Union[Fact, Pet]
