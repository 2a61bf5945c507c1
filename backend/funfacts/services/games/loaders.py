"""Catalog source backed by a people image directory and two CSV files."""

import csv
import logging
import os
import re

from .errors import CatalogLoadError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.gif', '.webp'}

_NAME_HEADER = re.compile(r'^name$', re.IGNORECASE)
_FACT_HEADER = re.compile(r'^(fun\s*fact|fact)$', re.IGNORECASE)
_OWNER_HEADER = re.compile(r'^owner$', re.IGNORECASE)
_PET_NAME_HEADER = re.compile(r'^(name|pet)$', re.IGNORECASE)
_IMAGE_HEADER = re.compile(r'^image$', re.IGNORECASE)


def title_case_from_filename(filename: str) -> str:
    """'ann-marie_smith.jpg' -> 'Ann Marie Smith'"""
    base = re.sub(r'\.[^.]+$', '', filename.lstrip('.'))
    words = [w for w in re.split(r'[-_\s]+', base) if w]
    return ' '.join(w[:1].upper() + w[1:].lower() for w in words)


def _find_column(header, pattern):
    for idx, cell in enumerate(header):
        if pattern.match(cell.strip()):
            return idx
    return -1


def _cell(row, idx):
    if 0 <= idx < len(row):
        return row[idx].strip()
    return ''


def read_csv_rows(path):
    """Return (header, rows) for a CSV file, or None if it does not exist.

    Blank lines are dropped. Read or decode failures raise CatalogLoadError.
    """
    try:
        with open(path, newline='', encoding='utf-8-sig') as fh:
            rows = [row for row in csv.reader(fh) if any(cell.strip() for cell in row)]
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise CatalogLoadError(f'cannot read {path}: {exc}') from exc
    if not rows:
        return [], []
    return rows[0], rows[1:]


class DirectoryCatalogSource:
    """Reads people from an image directory, facts and pets from CSV.

    Missing files or directories count as empty lists.
    """

    def __init__(self, people_dir, facts_csv, pets_csv=None,
                 people_url_prefix='/people/', pets_url_prefix='/pets/'):
        self.people_dir = people_dir
        self.facts_csv = facts_csv
        self.pets_csv = pets_csv
        self.people_url_prefix = people_url_prefix
        self.pets_url_prefix = pets_url_prefix

    @classmethod
    def from_config(cls, config):
        return cls(
            people_dir=config.get('PEOPLE_DIR'),
            facts_csv=config.get('FACTS_CSV'),
            pets_csv=config.get('PETS_CSV'),
        )

    def people(self):
        if not self.people_dir:
            return []
        try:
            files = sorted(os.listdir(self.people_dir))
        except FileNotFoundError:
            logger.warning('people directory %s not found', self.people_dir)
            return []
        except OSError as exc:
            raise CatalogLoadError(f'cannot list {self.people_dir}: {exc}') from exc
        return [
            {
                'name': title_case_from_filename(f),
                'image': self.people_url_prefix + f,
                'filename': f,
            }
            for f in files
            if os.path.splitext(f)[1].lower() in IMAGE_EXTENSIONS
        ]

    def facts(self):
        if not self.facts_csv:
            return []
        parsed = read_csv_rows(self.facts_csv)
        if parsed is None:
            logger.warning('facts file %s not found', self.facts_csv)
            return []
        header, rows = parsed
        if not header:
            return []
        name_idx = _find_column(header, _NAME_HEADER)
        fact_idx = _find_column(header, _FACT_HEADER)
        if name_idx < 0:
            raise CatalogLoadError(f'{self.facts_csv}: no Name column in header {header!r}')
        facts = []
        for row in rows:
            name = _cell(row, name_idx)
            if not name:
                continue
            facts.append({'id': len(facts) + 1, 'name': name, 'fact': _cell(row, fact_idx)})
        return facts

    def pets(self):
        if not self.pets_csv:
            return []
        parsed = read_csv_rows(self.pets_csv)
        if parsed is None:
            return []
        header, rows = parsed
        if not header:
            return []
        owner_idx = _find_column(header, _OWNER_HEADER)
        name_idx = _find_column(header, _PET_NAME_HEADER)
        image_idx = _find_column(header, _IMAGE_HEADER)
        if owner_idx < 0:
            raise CatalogLoadError(f'{self.pets_csv}: no Owner column in header {header!r}')
        pets = []
        for row in rows:
            owner = _cell(row, owner_idx)
            if not owner:
                continue
            image = _cell(row, image_idx)
            pets.append({
                'id': len(pets) + 1,
                'owner': owner,
                'name': _cell(row, name_idx),
                'image': self.pets_url_prefix + image if image else None,
            })
        return pets
