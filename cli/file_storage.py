"""File-based storage implementation."""

import json
import logging
import os

from core.config import MISTAKES_PATH, STATISTICS_PATH
from core.errors import StatisticsFileError
from core.interfaces import Storage
from core.models import Question
from core.utils import format_mistake

logger = logging.getLogger(__name__)


class FileStorage(Storage):
    """Statistics in a JSON file, mistakes appended to a plain text file."""

    def __init__(self, statistics_file: str = None, mistakes_file: str = None):
        self.statistics_file = statistics_file or STATISTICS_PATH
        self.mistakes_file = mistakes_file or MISTAKES_PATH

    def load_statistics(self) -> dict | None:
        if not os.path.exists(self.statistics_file):
            return None
        try:
            with open(self.statistics_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except UnicodeDecodeError as e:
            raise StatisticsFileError(f'Statistics file is not valid UTF-8: {e}') from e
        except OSError as e:
            raise StatisticsFileError(f'Failed to read statistics file: {e}') from e
        except json.JSONDecodeError as e:
            raise StatisticsFileError(f'Failed to parse statistics file:\n {e}') from e
        if not isinstance(data, dict):
            raise StatisticsFileError(f'Statistics file must hold an object, got {type(data).__name__}')
        return data

    def save_statistics(self, data: dict) -> None:
        """Write through a temporary file so a failed write keeps the old save."""
        tmp_file = self.statistics_file + '.tmp'
        with open(tmp_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_file, self.statistics_file)

    def log_mistake(self, question: Question, answer: str) -> None:
        entry = format_mistake(
            question.prompt.clue,
            question.prompt.verb,
            question.correct_answer,
            answer
        )
        try:
            with open(self.mistakes_file, 'a', encoding='utf-8') as f:
                f.write(entry)
        except OSError as e:
            logger.error(f'Failed to log mistake: {e}')
            return
        logger.info('Logged mistake')
