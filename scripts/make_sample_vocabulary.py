#!/usr/bin/env python3
"""Write an example vocabulary workbook to start practising with."""

import argparse
import sys
from pathlib import Path

from openpyxl import Workbook

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.config import WORDS_PATH


def get_sample_data():
    """English present and past tense sample.

    Returns (clues, rows) where rows are (notes, verb, form per clue...).
    An empty form means the pairing is not practised.
    """
    clues = ['I', 'you', 'he/she/it', 'we', 'they', 'past']
    rows = [
        ('regular', 'walk', 'walk', 'walk', 'walks', 'walk', 'walk', 'walked'),
        ('regular', 'play', 'play', 'play', 'plays', 'play', 'play', 'played'),
        ('-es', 'watch', 'watch', 'watch', 'watches', 'watch', 'watch', 'watched'),
        ('-ies', 'try', 'try', 'try', 'tries', 'try', 'try', 'tried'),
        ('irregular', 'go', 'go', 'go', 'goes', 'go', 'go', 'went'),
        ('irregular', 'have', 'have', 'have', 'has', 'have', 'have', 'had'),
        ('irregular', 'be', 'am', 'are', 'is', 'are', 'are', ''),
        ('irregular', 'do', 'do', 'do', 'does', 'do', 'do', 'did'),
        ('irregular', 'write', 'write', 'write', 'writes', 'write', 'write', 'wrote'),
        ('modal', 'can', 'can', 'can', 'can', 'can', 'can', 'could'),
    ]
    return clues, rows


def main():
    parser = argparse.ArgumentParser(description='Create a sample vocabulary workbook')
    parser.add_argument('--output', default=WORDS_PATH, help=f'Output file (default: {WORDS_PATH})')
    parser.add_argument('--force', action='store_true', help='Overwrite an existing file')
    args = parser.parse_args()

    output = Path(args.output)
    if output.exists() and not args.force:
        print(f'Error: {output} already exists, use --force to overwrite')
        return 1

    clues, rows = get_sample_data()
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = 'Verbs'
    sheet.append(['', 'verb'] + clues)
    for row in rows:
        sheet.append(list(row))
    workbook.save(output)
    print(f'Wrote {len(rows)} verbs and {len(clues)} clues to {output}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
