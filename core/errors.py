"""Fatal error types and process exit codes."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit statuses.

    Values must not change between versions, new ones are only appended.
    """
    OK = 0
    DATABASE_ERROR = 1
    LOGGING_ERROR = 2
    UI_ERROR = 3
    INTERNAL_ERROR = 4
    MISTAKES_LOGGING_ERROR = 5
    STATISTICS_ERROR = 6
    EMPTY_VOCABULARY = 7


class DrillError(Exception):
    """Base class for errors that stop the program."""

    exit_code = ExitCode.INTERNAL_ERROR


class VocabularyError(DrillError):
    """The vocabulary source is missing or malformed."""

    exit_code = ExitCode.DATABASE_ERROR


class EmptyVocabularyError(DrillError):
    """The vocabulary has no prompt with an answer."""

    exit_code = ExitCode.EMPTY_VOCABULARY


class StatisticsFileError(DrillError):
    """The statistics file cannot be read or decoded."""

    exit_code = ExitCode.STATISTICS_ERROR


class SamplerError(DrillError):
    """Weighted question selection kept missing every entry."""

    exit_code = ExitCode.INTERNAL_ERROR
