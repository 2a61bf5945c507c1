"""Per-app catalog access for the HTTP layer."""

from flask import current_app

from funfacts.services.games import DirectoryCatalogSource, load_catalog

_EXTENSION_KEY = 'funfacts_catalog'


def catalog_source():
    source = current_app.config.get('CATALOG_SOURCE')
    if source is not None:
        return source
    return DirectoryCatalogSource.from_config(current_app.config)


def get_catalog(refresh=False):
    """Return the app's catalog, loading it on first use.

    A failed load is not cached, so the next request tries again. Raises
    CatalogLoadError.
    """
    catalog = current_app.extensions.get(_EXTENSION_KEY)
    if catalog is None or refresh:
        catalog = load_catalog(catalog_source())
        current_app.extensions[_EXTENSION_KEY] = catalog
        current_app.logger.info(
            f"[catalog] loaded people={len(catalog.people)} facts={len(catalog.facts)} pets={len(catalog.pets)}"
        )
    return catalog
