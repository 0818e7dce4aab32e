"""Domain models for verbdrill application."""

from typing import NamedTuple

from .config import PROMPT_SEPARATOR, UINT16_MAX
from .errors import StatisticsFileError


class Prompt(NamedTuple):
    """A (clue, verb) pair that expects one conjugated form."""

    clue: str
    verb: str

    def encode(self) -> str:
        """Key used in the statistics file."""
        return f'{self.clue}{PROMPT_SEPARATOR}{self.verb}'

    @classmethod
    def decode(cls, key: str) -> 'Prompt':
        tokens = key.split(PROMPT_SEPARATOR)
        if len(tokens) != 2:
            raise StatisticsFileError(f'Invalid key "{key}" in statistics file')
        return cls(tokens[0], tokens[1])


class Question(NamedTuple):
    """Snapshot of a drawn prompt and its expected answer."""

    prompt: Prompt
    correct_answer: str


class PromptStats:
    """Per-prompt practice counters."""

    def __init__(self, streak: int = 0, correct: int = 0, mistakes: int = 0):
        self.streak = streak
        self.correct = correct
        self.mistakes = mistakes

    @property
    def weight(self) -> float:
        """Sampling weight, 1 for a fresh prompt and shrinking as the streak grows."""
        return 1 / (1 + self.streak)

    @property
    def attempted(self) -> bool:
        return self.correct != 0 or self.mistakes != 0

    def __eq__(self, other):
        if not isinstance(other, PromptStats):
            return NotImplemented
        return (self.streak, self.correct, self.mistakes) == (other.streak, other.correct, other.mistakes)

    def __repr__(self):
        return f'PromptStats(streak={self.streak}, correct={self.correct}, mistakes={self.mistakes})'


def _increment(value: int) -> int:
    return min(value + 1, UINT16_MAX)


class StatisticsStore:
    """Statistics for every known prompt plus the running sum of their weights.

    Entries are only ever replaced through update_stats(), which keeps
    total_weight equal to the sum of all weights without recomputing it.
    """

    def __init__(self):
        self.statistics = {}    # Prompt -> PromptStats
        self.answers = {}       # Prompt -> expected answer
        self.total_weight = 0.0
        # Records from the statistics file whose prompt is not in the vocabulary,
        # kept so they survive the next save: {encoded prompt: StatsRecord}
        self.dead_records = {}

    def __len__(self) -> int:
        return len(self.statistics)

    def __contains__(self, prompt) -> bool:
        return prompt in self.statistics

    def add_prompt(self, prompt: Prompt, answer: str) -> None:
        """Register a new prompt with zeroed statistics."""
        stats = PromptStats()
        self.statistics[prompt] = stats
        self.answers[prompt] = answer
        self.total_weight += stats.weight

    def update_stats(self, prompt: Prompt, new_stats: PromptStats) -> None:
        self.total_weight -= self.statistics[prompt].weight
        self.statistics[prompt] = new_stats
        self.total_weight += new_stats.weight

    def continue_streak(self, prompt: Prompt) -> None:
        """Record a correct answer."""
        old = self.statistics[prompt]
        self.update_stats(prompt, PromptStats(
            streak=_increment(old.streak),
            correct=_increment(old.correct),
            mistakes=old.mistakes
        ))

    def end_streak(self, prompt: Prompt) -> None:
        """Record a wrong answer."""
        old = self.statistics[prompt]
        self.update_stats(prompt, PromptStats(
            streak=0,
            correct=old.correct,
            mistakes=_increment(old.mistakes)
        ))

    def weight_of(self, prompt: Prompt) -> float:
        return self.statistics[prompt].weight

    def recomputed_weight(self) -> float:
        """Sum of weights computed from scratch (for checks, not for sampling)."""
        return sum(stats.weight for stats in self.statistics.values())

    def prompts(self) -> list[Prompt]:
        """Prompts in catalog order."""
        return list(self.statistics)
