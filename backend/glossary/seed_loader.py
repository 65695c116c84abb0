"""
Seed Loader

Parses the bundled CSV dataset into Term records. Columns are located by
header name, so the column order of the file does not matter.
"""
import csv
from io import StringIO
from pathlib import Path
from typing import List, Dict, Sequence
from loguru import logger

from database.errors import StorageError
from .term import Term

# Header name -> Term field
SEED_COLUMNS: Dict[str, str] = {
    "id": "id",
    "Categoría": "category",
    "Español": "es",
    "English": "en",
    "Deutsch": "de",
    "Français": "fr",
    "Sinónimos (ES)": "synonyms_es",
    "Notas": "notes",
}


def parse_seed(csv_content: str) -> List[List[str]]:
    """
    Parse CSV text into rows of string cells.

    No numeric coercion is done; blank lines are dropped and a leading
    UTF-8 BOM is ignored.
    """
    if csv_content.startswith("\ufeff"):
        csv_content = csv_content[1:]
    reader = csv.reader(StringIO(csv_content))
    return [row for row in reader if row]


def _cell(row: Sequence[str], pos: int) -> str:
    """Trimmed cell value, empty when the column is missing"""
    return row[pos].strip() if 0 <= pos < len(row) else ""


def rows_to_terms(rows: Sequence[Sequence[str]]) -> List[Term]:
    """
    Map parsed rows to terms using the header row.

    Args:
        rows: Parsed CSV rows, header first

    Returns:
        Terms for every data row with a non-empty id
    """
    if len(rows) <= 1:
        return []

    header = [cell.strip() for cell in rows[0]]
    positions = {
        field: header.index(name) if name in header else -1
        for name, field in SEED_COLUMNS.items()
    }
    if positions["id"] < 0:
        logger.warning("Seed header has no 'id' column; every row will be skipped")

    terms = []
    skipped = 0
    for row in rows[1:]:
        values = {field: _cell(row, pos) for field, pos in positions.items()}
        if not values["id"]:
            skipped += 1
            continue
        terms.append(Term(**values))

    if skipped:
        logger.debug(f"Skipped {skipped} seed rows without id")
    return terms


def load_seed_file(path: Path) -> List[Term]:
    """Read and parse a UTF-8 seed CSV file"""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
        rows = parse_seed(content)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        logger.error(f"Cannot read seed file {path}: {e}")
        raise StorageError(f"Cannot read seed file {path}: {e}") from e
    terms = rows_to_terms(rows)
    logger.info(f"Parsed {len(terms)} terms from {path.name}")
    return terms
