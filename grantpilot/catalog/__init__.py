"""Static grant catalog."""

from .catalog import DEFAULT_CATALOG_PATH, GRANT_CATALOG, get_grant, load_catalog

__all__ = ["DEFAULT_CATALOG_PATH", "GRANT_CATALOG", "get_grant", "load_catalog"]
