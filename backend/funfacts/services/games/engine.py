import threading
from typing import Optional, Tuple

from . import state as store
from .catalog import Catalog, CatalogSource, load_catalog
from .items import ItemKey
from .narrator import Narration, narrate
from .scoring import RoundResult, submit_round
from .state import RenderModel, SessionState


class GameEngine:
    """One game session: a catalog plus the mutable state played against it.

    All operations take the same lock, so a multi-threaded host never sees
    a half-applied placement or round.
    """

    def __init__(self, catalog: Catalog, state: Optional[SessionState] = None):
        self.catalog = catalog
        self.state = state if state is not None else store.new_session(catalog)
        self._lock = threading.RLock()

    @classmethod
    def from_source(cls, source: CatalogSource) -> 'GameEngine':
        # load_catalog raises before any state exists
        return cls(load_catalog(source))

    def place(self, key: ItemKey, person_name: str) -> bool:
        with self._lock:
            return store.place(self.state, self.catalog, key, person_name)

    def unplace(self, key: ItemKey) -> bool:
        with self._lock:
            return store.unplace(self.state, key)

    def submit_round(self) -> Tuple[RoundResult, Narration]:
        with self._lock:
            result = submit_round(self.state, self.catalog)
            return result, narrate(result)

    def snapshot(self) -> RenderModel:
        with self._lock:
            return store.snapshot(self.state, self.catalog)

    def reset(self) -> None:
        with self._lock:
            self.state = store.new_session(self.catalog)
