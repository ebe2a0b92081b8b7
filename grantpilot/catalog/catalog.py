"""Grant catalog loading.

The catalog is a read-only list of funding programs shipped with the package
(grants.yaml). It is loaded once at import. The CATALOG_PATH setting
(Config.catalog_path) can point a session at an alternative YAML or JSON
file with the same record shape.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..exceptions import CatalogError
from ..models import Grant

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "grants.yaml"


def load_catalog(filepath: Optional[str] = None) -> tuple[Grant, ...]:
    """Load and validate grant records.

    Args:
        filepath: Optional path to a catalog file; defaults to the bundled grants.yaml

    Returns:
        Grants in file order

    Raises:
        FileNotFoundError: If filepath provided but doesn't exist
        CatalogError: If the file is malformed or ids are not unique
    """
    path = Path(filepath) if filepath else DEFAULT_CATALOG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    if path.suffix == ".json":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    elif path.suffix in [".yaml", ".yml"]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    else:
        raise CatalogError(f"Unsupported file format: {path.suffix}. Use .json, .yaml, or .yml")

    if not isinstance(data, list) or not data:
        raise CatalogError(f"Catalog {path} must contain a non-empty list of grants")

    grants = []
    seen_ids = set()
    for index, record in enumerate(data):
        try:
            grant = Grant(**record)
        except (TypeError, ValidationError) as exc:
            raise CatalogError(f"Invalid grant record #{index} in {path}: {exc}") from exc
        if grant.id in seen_ids:
            raise CatalogError(f"Duplicate grant id in {path}: {grant.id}")
        seen_ids.add(grant.id)
        grants.append(grant)

    logger.debug("Loaded %d grants from %s", len(grants), path)
    return tuple(grants)


GRANT_CATALOG = load_catalog()


def get_grant(grant_id: str, catalog: tuple[Grant, ...] = GRANT_CATALOG) -> Grant:
    """Look up a grant by id. Raises KeyError for unknown ids."""
    for grant in catalog:
        if grant.id == grant_id:
            return grant
    raise KeyError(grant_id)
