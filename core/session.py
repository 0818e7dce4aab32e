"""Drill session: current question, answer checking and session counters."""

import logging
from enum import Enum

from .catalog import build_statistics
from .config import ANSWER_CHAR_LIMIT, UINT16_MAX
from .errors import EmptyVocabularyError
from .interfaces import Storage
from .models import PromptStats, StatisticsStore
from .reconcile import ReconcileReport, expand, pack
from .sampler import QuestionSampler
from .schemas import parse_snapshot
from .utils import answers_match
from .vocabulary import VocabularyTable

logger = logging.getLogger(__name__)


class Mode(Enum):
    INPUT = 'input'
    VALIDATION = 'validation'


def load_statistics(table: VocabularyTable, storage: Storage) -> tuple[StatisticsStore, ReconcileReport]:
    """Fresh statistics for the table, merged with whatever storage has saved."""
    store, missing = build_statistics(table)
    logger.info('Trying to read statistics file...')
    data = storage.load_statistics()
    if data is None:
        logger.info('Statistics file not found')
        report = ReconcileReport()
    else:
        report = expand(store, parse_snapshot(data))
    report.missing = missing
    logger.info(
        f'Statistics ready: {report.restored} restored, {report.reset} reset, '
        f'{report.dead} kept for removed questions, {report.missing} empty fields'
    )
    return store, report


class DrillSession:
    """One run of the drill. Owns the statistics store for its lifetime."""

    def __init__(self, store: StatisticsStore, storage: Storage, sampler: QuestionSampler = None,
                 report: ReconcileReport = None):
        if not store.statistics:
            raise EmptyVocabularyError('Vocabulary contains no questions with an answer')
        self.store = store
        self.storage = storage
        self.report = report or ReconcileReport()
        self.sampler = sampler or QuestionSampler()
        self.mode = Mode.INPUT
        self.question = self.sampler.draw(store)
        self.answer = ''
        self.correct_answers = 0
        self.wrong_answers = 0
        self.streak = 0

    @classmethod
    def start(cls, table: VocabularyTable, storage: Storage, sampler: QuestionSampler = None) -> 'DrillSession':
        store, report = load_statistics(table, storage)
        return cls(store, storage, sampler, report)

    @property
    def question_number(self) -> int:
        """1-based number of the question on screen."""
        number = self.correct_answers + self.wrong_answers
        if self.mode == Mode.INPUT:
            # The current one is unanswered
            number += 1
        return number

    @property
    def question_stats(self) -> PromptStats:
        return self.store.statistics[self.question.prompt]

    @property
    def session_stats(self) -> PromptStats:
        return PromptStats(self.streak, self.correct_answers, self.wrong_answers)

    def type_text(self, text: str) -> None:
        if self.mode != Mode.INPUT:
            return
        self.answer = (self.answer + text)[:ANSWER_CHAR_LIMIT]

    def delete_char(self) -> None:
        if self.mode != Mode.INPUT:
            return
        self.answer = self.answer[:-1]

    def is_answer_correct(self) -> bool:
        return answers_match(self.question.correct_answer, self.answer)

    def submit(self) -> bool:
        """Check the typed answer and record the result. Returns correctness."""
        if self.mode != Mode.INPUT:
            raise RuntimeError(f'Cannot submit in {self.mode.value} mode')
        prompt = self.question.prompt
        correct = self.is_answer_correct()
        if correct:
            self.correct_answers = min(self.correct_answers + 1, UINT16_MAX)
            self.streak = min(self.streak + 1, UINT16_MAX)
            self.store.continue_streak(prompt)
            logger.info(f'Answer is correct, new score is {self.store.weight_of(prompt):.2f}')
        else:
            self.storage.log_mistake(self.question, self.answer)
            self.streak = 0
            self.wrong_answers = min(self.wrong_answers + 1, UINT16_MAX)
            self.store.end_streak(prompt)
            logger.info(f'Answer is wrong, new score is {self.store.weight_of(prompt):.2f}')
        self.mode = Mode.VALIDATION
        return correct

    def next_question(self) -> None:
        if self.mode != Mode.VALIDATION:
            raise RuntimeError(f'Cannot advance in {self.mode.value} mode')
        logger.info('New question requested')
        self.question = self.sampler.draw(self.store)
        self.answer = ''
        self.mode = Mode.INPUT

    def save(self) -> bool:
        """Write statistics to storage. Returns False if the write failed."""
        try:
            self.storage.save_statistics(pack(self.store).to_dict())
        except OSError as e:
            logger.error(f'Could not write statistics: {e}')
            return False
        logger.info('Statistics saved')
        return True
