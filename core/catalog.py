"""Builds fresh statistics from the vocabulary table."""

import logging

from .models import Prompt, StatisticsStore
from .vocabulary import VocabularyTable

logger = logging.getLogger(__name__)


def build_statistics(table: VocabularyTable) -> tuple[StatisticsStore, int]:
    """Create a store with one zeroed entry per (clue, verb) pair that has a form.

    Returns (store, missing_fields). Duplicate pairs keep the first form.
    """
    logger.info('Initializing statistics...')
    store = StatisticsStore()
    missing_fields = 0
    duplicates = 0
    for verb_index, verb in enumerate(table.verbs):
        for clue_index, clue in enumerate(table.clues):
            answer = table.form(verb_index, clue_index)
            if answer == '':
                missing_fields += 1
                continue
            prompt = Prompt(clue, verb)
            if prompt in store:
                duplicates += 1
                continue
            store.add_prompt(prompt, answer)

    if missing_fields > 0:
        logger.warning(f'{missing_fields} missing database fields')
    if duplicates > 0:
        logger.warning(f'{duplicates} duplicate clue/verb pairs, keeping the first form')
    logger.info(f'{len(store)} questions available')
    return store, missing_fields
