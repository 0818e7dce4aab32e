from .models import Prompt, PromptStats, Question, StatisticsStore
from .interfaces import Storage
from .catalog import build_statistics
from .sampler import QuestionSampler
from .reconcile import ReconcileReport, expand, pack
from .schemas import StatsRecord, StatisticsSnapshot, parse_snapshot
from .session import DrillSession, Mode, load_statistics
from .vocabulary import VocabularyTable, read_vocabulary
from .errors import (
    ExitCode, DrillError, VocabularyError, EmptyVocabularyError,
    StatisticsFileError, SamplerError
)

__all__ = [
    'Prompt', 'PromptStats', 'Question', 'StatisticsStore',
    'Storage',
    'build_statistics',
    'QuestionSampler',
    'ReconcileReport', 'expand', 'pack',
    'StatsRecord', 'StatisticsSnapshot', 'parse_snapshot',
    'DrillSession', 'Mode', 'load_statistics',
    'VocabularyTable', 'read_vocabulary',
    'ExitCode', 'DrillError', 'VocabularyError', 'EmptyVocabularyError',
    'StatisticsFileError', 'SamplerError'
]
