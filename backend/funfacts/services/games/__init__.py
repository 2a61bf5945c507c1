"""Game domain services: item placement, round scoring and narration.

This package contains pure domain logic that should be imported by
HTTP routes and socket handlers, keeping transport concerns separated
from core game mechanics. Nothing in here knows about Flask or the
database.
"""

from .catalog import Catalog, StaticCatalogSource, load_catalog
from .engine import GameEngine
from .errors import CatalogLoadError, FunFactsError
from .items import Fact, ItemKey, ItemKind, Person, Pet
from .loaders import DirectoryCatalogSource
from .narrator import Narration, NarrationKind, narrate
from .scoring import RoundResult, points_for_attempt, submit_round
from .state import AssignmentRecord, SessionState, new_session

__all__ = [
    'AssignmentRecord',
    'Catalog',
    'CatalogLoadError',
    'DirectoryCatalogSource',
    'Fact',
    'FunFactsError',
    'GameEngine',
    'ItemKey',
    'ItemKind',
    'Narration',
    'NarrationKind',
    'Person',
    'Pet',
    'RoundResult',
    'SessionState',
    'StaticCatalogSource',
    'load_catalog',
    'narrate',
    'new_session',
    'points_for_attempt',
    'submit_round',
]
