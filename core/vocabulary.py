"""Vocabulary table: clue labels, verbs and their conjugated forms.

The source is a spreadsheet (or CSV) whose first row holds clue labels
from the third column on, and whose following rows hold one verb each:
column 2 is the verb name, columns 3+ the forms for the matching clues.
The first column is free for the user's own notes.
"""

import csv
import logging
import os
import zipfile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .config import PROMPT_SEPARATOR
from .errors import VocabularyError

logger = logging.getLogger(__name__)

VERB_COLUMN = 1
FIRST_FORM_COLUMN = 2


class VocabularyTable:
    """Immutable table read once at startup."""

    def __init__(self, clues: list[str], verbs: list[str], forms: list[list[str]]):
        self.clues = tuple(clues)
        self.verbs = tuple(verbs)
        # forms[verb_index][clue_index]; rows may be shorter than clues
        self.forms = tuple(tuple(row) for row in forms)

    def form(self, verb_index: int, clue_index: int) -> str:
        """Form for a verb/clue pair, '' when the cell is missing."""
        row = self.forms[verb_index]
        if clue_index >= len(row):
            return ''
        return row[clue_index]

    @classmethod
    def from_rows(cls, rows: list[list[str]]) -> 'VocabularyTable':
        """Build the table from raw rows, header first."""
        rows = [_trim(row) for row in rows]
        if len(rows) < 2:
            raise VocabularyError('Table contains less than 2 lines!')

        clues = rows[0][FIRST_FORM_COLUMN:]
        verbs = []
        forms = []
        unnamed = 0
        for row in rows[1:]:
            if not row:
                continue
            verb = row[VERB_COLUMN] if len(row) > VERB_COLUMN else ''
            if not verb:
                unnamed += 1
                continue
            verbs.append(verb)
            forms.append(row[FIRST_FORM_COLUMN:])
        if unnamed:
            logger.warning(f'{unnamed} rows have no verb name, skipping them')

        for label in clues + verbs:
            if PROMPT_SEPARATOR in label:
                raise VocabularyError(
                    f'"{label}" contains reserved character "{PROMPT_SEPARATOR}"'
                )
        return cls(clues, verbs, forms)


def _cell_text(value) -> str:
    if value is None:
        return ''
    return str(value).strip()


def _trim(row) -> list[str]:
    """Convert cells to text and drop trailing empty cells."""
    cells = [_cell_text(value) for value in row]
    while cells and cells[-1] == '':
        cells.pop()
    return cells


def _read_xlsx(path: str) -> list[list]:
    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except (OSError, InvalidFileException, zipfile.BadZipFile, KeyError) as e:
        # KeyError: a zip archive without the workbook parts
        raise VocabularyError(f'Failed to open {path}: {e}') from e
    try:
        sheet = workbook.worksheets[0]
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def _read_csv(path: str) -> list[list]:
    try:
        with open(path, newline='', encoding='utf-8-sig') as f:
            return list(csv.reader(f))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise VocabularyError(f'Failed to read {path}: {e}') from e


READERS = {
    '.xlsx': _read_xlsx,
    '.xlsm': _read_xlsx,
    '.csv': _read_csv,
}


def read_vocabulary(path: str) -> VocabularyTable:
    """Read the vocabulary source at path."""
    if not os.path.exists(path):
        raise VocabularyError(f'Vocabulary file not found at {path}')
    extension = os.path.splitext(path)[1].lower()
    reader = READERS.get(extension)
    if reader is None:
        raise VocabularyError(f'Unsupported vocabulary file type "{extension}"')

    logger.info(f'Reading vocabulary from {path}...')
    table = VocabularyTable.from_rows(reader(path))
    logger.info(f'Read {len(table.verbs)} verbs and {len(table.clues)} clues')
    return table
