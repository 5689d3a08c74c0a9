"""
Names workbook -> in-memory catalog.

The workbook has two sheets:
  Birds: code | swedish | english | latin   (every row, no header skipping)
  Tags:  code | tag | tag | ...             (first row is a header)

Any malformed row aborts the load; there is no partial catalog.
"""

import math
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd
from loguru import logger

from albumsync.errors import ConfigurationError, MetadataValidationError
from albumsync.models import TaxonEntry

BIRDS_SHEET = "Birds"
TAGS_SHEET = "Tags"

Row = Sequence[Optional[str]]


def _cell(value) -> Optional[str]:
    """Normalize a spreadsheet cell: blanks and NaN become None, the rest str."""
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            # xlrd reads every .xls number as float; 2023 must stay "2023"
            return str(int(value))
    text = str(value)
    return text if text else None


def _row(values: Iterable) -> List[Optional[str]]:
    cells = [_cell(v) for v in values]
    while cells and cells[-1] is None:
        cells.pop()
    return cells


def read_workbook(path: Path) -> Tuple[List[Row], List[Row]]:
    """
    Read the Birds and Tags sheets as plain rows of strings/None.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Could not find {path}")

    sheets = pd.read_excel(path, sheet_name=None, header=None, dtype=object)
    for name in (BIRDS_SHEET, TAGS_SHEET):
        if name not in sheets:
            raise ConfigurationError(f"{path} has no sheet named {name}")

    def rows(frame: pd.DataFrame) -> List[Row]:
        return [_row(r) for r in frame.itertuples(index=False, name=None)]

    return rows(sheets[BIRDS_SHEET]), rows(sheets[TAGS_SHEET])


class MetadataCatalog:
    """Taxon entries and tag sets, keyed by the codes used as directory names."""

    def __init__(self, taxa: Dict[str, TaxonEntry], tag_sets: Dict[str, Tuple[str, ...]]):
        self.taxa = taxa
        self.tag_sets = tag_sets

    @classmethod
    def load(cls, taxon_rows: Iterable[Row], tag_rows: Iterable[Row], log=logger) -> "MetadataCatalog":
        taxa: Dict[str, TaxonEntry] = {}
        for row in taxon_rows:
            code, swedish, english, latin = (list(row) + [None] * 4)[:4]
            if not code:
                if swedish or english or latin:
                    raise MetadataValidationError(f"Missing code for {{{swedish or ''}, {english or ''}, {latin or ''}}}")
                continue
            for field_name, value in (("swedish", swedish), ("english", english), ("latin", latin)):
                if not value:
                    raise MetadataValidationError(f"Missing {field_name} name for {code}")
            # Last row for a code wins.
            taxa[code] = TaxonEntry(code=code, swedish=swedish, english=english, latin=latin)

        tag_sets: Dict[str, Tuple[str, ...]] = {}
        for row in list(tag_rows)[1:]:
            cells = list(row)
            code = cells[0] if cells else None
            tags = tuple(t for t in cells[1:] if t)
            if not code:
                if tags:
                    raise MetadataValidationError(f"Missing code for {list(tags)}")
                continue
            if not tags:
                log.warning("Missing tags for {}", code)
            tag_sets[code] = tags

        log.debug("Loaded {} taxa and {} tag sets", len(taxa), len(tag_sets))
        return cls(taxa, tag_sets)

    def taxon(self, code: str) -> Optional[TaxonEntry]:
        return self.taxa.get(code)

    def tags(self, code: str) -> Optional[Tuple[str, ...]]:
        return self.tag_sets.get(code)


def load_catalog(path: Path, log=logger) -> MetadataCatalog:
    taxon_rows, tag_rows = read_workbook(path)
    return MetadataCatalog.load(taxon_rows, tag_rows, log=log)
