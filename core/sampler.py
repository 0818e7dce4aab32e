"""Weighted random question selection."""

import logging
import random

from .config import SAMPLER_MAX_RETRIES
from .errors import EmptyVocabularyError, SamplerError
from .models import Question, StatisticsStore

logger = logging.getLogger(__name__)


class QuestionSampler:
    """Draws prompts with probability proportional to their weight."""

    def __init__(self, rng: random.Random = None, max_retries: int = SAMPLER_MAX_RETRIES):
        self.rng = rng or random.Random()
        self.max_retries = max_retries

    def draw(self, store: StatisticsStore) -> Question:
        """Pick the next question from the store.

        A single uniform value in [0, total_weight) is walked down the entries.
        Accumulated float error can let the walk finish without reaching zero;
        the draw is then repeated with a fresh value, at most max_retries times.
        """
        if not store.statistics or store.total_weight <= 0:
            raise EmptyVocabularyError('No questions to choose from')

        for _ in range(self.max_retries + 1):
            remaining = self.rng.random() * store.total_weight
            for prompt, stats in store.statistics.items():
                remaining -= stats.weight
                if remaining <= 0:
                    return Question(prompt, store.answers[prompt])
            logger.warning('Random question selection floating arithmetic problem, recalculating...')

        raise SamplerError(f'Question selection missed {self.max_retries + 1} times in a row')
