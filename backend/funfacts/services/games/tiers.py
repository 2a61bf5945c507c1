import logging

from .catalog import Catalog
from .state import SessionState

logger = logging.getLogger(__name__)


def locked_count(state: SessionState, items) -> int:
    return sum(1 for item in items if state.assignments[item.key].locked)


def check_pet_tier(state: SessionState, catalog: Catalog) -> bool:
    """Unlock pets once every fact is locked.

    Returns True only on the call that flips the flag. The flag never goes
    back to False, and an empty fact list never triggers it (pets start
    unlocked in that case).
    """
    if state.pets_unlocked or not catalog.facts:
        return False
    if locked_count(state, catalog.facts) != len(catalog.facts):
        return False
    state.pets_unlocked = True
    logger.info('pet tier unlocked after %d facts locked', len(catalog.facts))
    return True
