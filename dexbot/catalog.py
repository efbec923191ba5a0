"""Species catalog loaded once from the pokedex CSV exports."""

from __future__ import annotations

import csv
import logging
import random as _random
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

from .errors import CatalogLoadError, EntryNotFound
from .models import CatalogEntry

logger = logging.getLogger("dexbot.catalog")

ENGLISH_LANGUAGE_ID = 9
SPECIES_NAMES_FILE = "pokemon_species_names.csv"
FLAVOR_TEXT_FILE = "pokemon_species_flavor_text.csv"


class Catalog:
    """Read-only species list indexed by species id (1..N)."""

    def __init__(self, entries: Sequence[CatalogEntry], *, rng: Optional[_random.Random] = None):
        if not entries:
            raise CatalogLoadError("Catalog is empty.")
        for position, entry in enumerate(entries, start=1):
            if entry.species_id != position:
                raise CatalogLoadError(
                    f"Species ids must be contiguous from 1; expected #{position}, found #{entry.species_id}."
                )
            if not entry.name:
                raise CatalogLoadError(f"Species #{entry.species_id} has no name.")
            if not entry.variants:
                raise CatalogLoadError(f"Species #{entry.species_id} ({entry.name}) has no flavor text.")
        self._entries = tuple(entries)
        self._rng = rng or _random.Random()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def get(self, species_id: int) -> CatalogEntry:
        if not 1 <= species_id <= len(self._entries):
            raise EntryNotFound(species_id, len(self._entries))
        return self._entries[species_id - 1]

    def random(self) -> CatalogEntry:
        return self._rng.choice(self._entries)

    def pick_variant(self, entry: CatalogEntry) -> str:
        return self._rng.choice(entry.variants)


def normalize_flavor_text(text: str) -> str:
    """Flatten the hard line breaks the game text ships with."""
    # TODO: page breaks (\f) and hyphenated line ends in older game text are still left in place.
    return text.replace("\n", " ").replace("\r", " ")


def _open_rows(path: Path) -> List[Dict[str, str]]:
    if not path.exists():
        raise CatalogLoadError(f"Catalog data file not found: {path}")
    try:
        with path.open(newline="", encoding="utf-8") as handle:
            return list(csv.DictReader(handle))
    except (OSError, csv.Error, UnicodeDecodeError) as exc:
        raise CatalogLoadError(f"Failed to read {path}: {exc}") from exc


def _int_field(row: Dict[str, str], field: str, path: Path) -> int:
    try:
        return int(row[field])
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogLoadError(f"Bad or missing '{field}' column in {path.name}: {row!r}") from exc


def load_catalog(
    data_dir: Path,
    *,
    language_id: int = ENGLISH_LANGUAGE_ID,
    rng: Optional[_random.Random] = None,
) -> Catalog:
    """Build the catalog from the species-name and flavor-text exports."""
    names_path = data_dir / SPECIES_NAMES_FILE
    flavor_path = data_dir / FLAVOR_TEXT_FILE

    species: List[Dict[str, object]] = []
    for row in _open_rows(names_path):
        if _int_field(row, "local_language_id", names_path) != language_id:
            continue
        species_id = _int_field(row, "pokemon_species_id", names_path)
        if species_id != len(species) + 1:
            raise CatalogLoadError(
                f"{names_path.name}: expected species #{len(species) + 1}, found #{species_id}."
            )
        name = (row.get("name") or "").strip()
        if not name:
            raise CatalogLoadError(f"{names_path.name}: species #{species_id} has no name.")
        species.append(
            {
                "species_id": species_id,
                "name": name,
                # Some genera are empty.
                "genus": (row.get("genus") or "").strip(),
                "variants": {},
            }
        )
    if not species:
        raise CatalogLoadError(f"{names_path.name} has no species for language {language_id}.")

    for row in _open_rows(flavor_path):
        if _int_field(row, "language_id", flavor_path) != language_id:
            continue
        species_id = _int_field(row, "species_id", flavor_path)
        if not 1 <= species_id <= len(species):
            raise CatalogLoadError(f"{flavor_path.name}: flavor text for unknown species #{species_id}.")
        text = normalize_flavor_text(row.get("flavor_text") or "").strip()
        if text:
            # dict keeps first-seen order while dropping repeats
            species[species_id - 1]["variants"].setdefault(text, None)  # type: ignore[union-attr]

    entries = [
        CatalogEntry(
            species_id=int(item["species_id"]),  # type: ignore[arg-type]
            name=str(item["name"]),
            genus=str(item["genus"]),
            variants=tuple(item["variants"]),  # type: ignore[arg-type]
        )
        for item in species
    ]
    catalog = Catalog(entries, rng=rng)
    logger.info("Loaded %s species from %s (language %s).", len(catalog), data_dir, language_id)
    return catalog


__all__ = [
    "Catalog",
    "ENGLISH_LANGUAGE_ID",
    "FLAVOR_TEXT_FILE",
    "SPECIES_NAMES_FILE",
    "load_catalog",
    "normalize_flavor_text",
]
