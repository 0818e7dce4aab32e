"""Merging saved statistics into a fresh store, and packing them back."""

import logging

from .models import Prompt, PromptStats, StatisticsStore
from .schemas import StatisticsSnapshot, StatsRecord

logger = logging.getLogger(__name__)


class ReconcileReport:
    """What startup found: saved entries applied or not, and empty vocabulary cells."""

    def __init__(self, dead: int = 0, reset: int = 0, restored: int = 0, missing: int = 0):
        self.dead = dead
        self.reset = reset
        self.restored = restored
        # Vocabulary cells without a form, filled in by load_statistics
        self.missing = missing


def expand(store: StatisticsStore, snapshot: StatisticsSnapshot) -> ReconcileReport:
    """Apply a saved snapshot to a freshly built store.

    - prompt no longer in the vocabulary: kept as a dead record for the next save
    - answer changed since the save: saved counters dropped, entry stays fresh
    - otherwise: saved counters adopted
    Any malformed key raises StatisticsFileError before the store is touched.
    """
    logger.info('Updating statistics with content from file...')
    decoded = [(key, Prompt.decode(key), record) for key, record in snapshot.statistics.items()]

    report = ReconcileReport()
    for key, prompt, record in decoded:
        if prompt not in store:
            store.dead_records[key] = record
            report.dead += 1
            continue
        if record.answer != store.answers[prompt]:
            report.reset += 1
            continue
        store.update_stats(prompt, PromptStats(record.streak, record.correct, record.mistakes))
        report.restored += 1

    if report.dead > 0:
        logger.info(f'{report.dead} questions no longer exist, ignoring statistics for them')
    if report.reset > 0:
        logger.warning(f'{report.reset} questions have their answer changed, resetting statistics for them')
    return report


def pack(store: StatisticsStore) -> StatisticsSnapshot:
    """Snapshot of everything worth saving.

    Dead records are carried over unchanged, then every prompt that has been
    answered at least once is added. Untouched prompts are left out.
    """
    statistics = dict(store.dead_records)
    for prompt, stats in store.statistics.items():
        if not stats.attempted:
            continue
        statistics[prompt.encode()] = StatsRecord(
            streak=stats.streak,
            correct=stats.correct,
            mistakes=stats.mistakes,
            answer=store.answers[prompt]
        )
    return StatisticsSnapshot(statistics=statistics)
