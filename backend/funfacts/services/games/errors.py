class FunFactsError(Exception):
    """Base class for game errors."""


class CatalogLoadError(FunFactsError):
    """A catalog source could not be resolved; no session may be created."""
