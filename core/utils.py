"""Utility functions for verbdrill application."""


def answers_match(expected: str, given: str) -> bool:
    """Compare answers ignoring surrounding whitespace."""
    return expected.strip() == given.strip()


def format_mistake(clue: str, verb: str, correct: str, given: str) -> str:
    """Mistake log entry."""
    return (
        f'Question {clue} + {verb}:\n'
        f'    Correct: {correct}\n'
        f'    Answer: {given}\n\n'
    )
