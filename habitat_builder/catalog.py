"""
Habitat Builder — Animal Profile Catalog

Immutable registry of animal profiles, built once at startup and passed by
reference into every engine call. Profiles are validated when loaded; a
structurally incomplete entry stops the load instead of being scored later.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from types import MappingProxyType
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Optional, Union

from pydantic import ValidationError

from .models import AnimalProfile

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_DIR = Path(__file__).parent / "data" / "animals"


# ============================================================
# Errors
# ============================================================

class HabitatBuilderError(Exception):
    """Base error for the habitat builder package."""


class CatalogError(HabitatBuilderError):
    """A catalog source could not be read or contains an invalid profile."""


class UnknownAnimalError(HabitatBuilderError, KeyError):
    """No profile with the requested id exists in the catalog."""

    def __init__(self, animal_id: str):
        super().__init__(animal_id)
        self.animal_id = animal_id

    def __str__(self) -> str:
        return f"Unknown animal: {self.animal_id}"


# ============================================================
# Registry
# ============================================================

class AnimalCatalog(Mapping[str, AnimalProfile]):
    """Read-only mapping of animal id → profile, in load order."""

    def __init__(self, profiles: Union[Mapping[str, AnimalProfile], Iterable[AnimalProfile]] = ()):
        if isinstance(profiles, Mapping):
            items = list(profiles.items())
        else:
            items = [(p.id, p) for p in profiles]

        entries: dict[str, AnimalProfile] = {}
        for animal_id, profile in items:
            if animal_id in entries:
                raise CatalogError(f"Duplicate animal id: {animal_id}")
            entries[animal_id] = profile
        self._profiles = MappingProxyType(entries)

    def __getitem__(self, animal_id: str) -> AnimalProfile:
        return self._profiles[animal_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)

    def __repr__(self) -> str:
        return f"AnimalCatalog({len(self)} profiles)"

    def require(self, animal_id: str) -> AnimalProfile:
        profile = self._profiles.get(animal_id)
        if profile is None:
            raise UnknownAnimalError(animal_id)
        return profile

    def ids(self) -> list[str]:
        return list(self._profiles)


# ============================================================
# Loading
# ============================================================

def parse_profile(data: dict[str, Any], source: str = "<memory>") -> AnimalProfile:
    """Validate one raw profile dict, raising CatalogError with the source name."""
    try:
        return AnimalProfile.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise CatalogError(f"Invalid animal profile in {source}: {problems}") from e


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Cannot read catalog file {path}: {e}") from e


def _profiles_from_document(doc: Any, source: str) -> list[AnimalProfile]:
    # A file holds one profile, a list of profiles, or an id → profile mapping.
    if isinstance(doc, list):
        return [parse_profile(item, source) for item in doc]
    if isinstance(doc, dict):
        if "id" in doc:
            return [parse_profile(doc, source)]
        profiles = []
        for animal_id, item in doc.items():
            if not isinstance(item, dict):
                raise CatalogError(f"Invalid entry {animal_id!r} in {source}")
            profiles.append(parse_profile({"id": animal_id, **item}, source))
        return profiles
    raise CatalogError(f"Unsupported catalog document in {source}")


def load_catalog(path: Union[str, Path]) -> AnimalCatalog:
    """
    Load profiles from a JSON file or a directory of JSON files.
    Directory entries are read in file-name order, which fixes the
    catalog's iteration order.
    """
    root = Path(path)
    if root.is_dir():
        files = sorted(f for f in root.iterdir() if f.suffix.lower() == ".json" and f.is_file())
        if not files:
            logger.warning(f"No catalog files found in {root}")
    elif root.is_file():
        files = [root]
    else:
        raise CatalogError(f"Catalog path does not exist: {root}")

    profiles: list[AnimalProfile] = []
    for f in files:
        profiles.extend(_profiles_from_document(_read_json(f), f.name))

    catalog = AnimalCatalog(profiles)
    logger.info(f"Loaded {len(catalog)} animal profiles from {root}")
    return catalog


def load_default_catalog(path: Optional[Union[str, Path]] = None) -> AnimalCatalog:
    """Load from `path` if given, otherwise the catalog bundled with the package."""
    return load_catalog(path or DEFAULT_CATALOG_DIR)
