"""Entry point for verbdrill CLI."""

import argparse
import logging
import random
import sys

from core.config import WORDS_PATH, STATISTICS_PATH, MISTAKES_PATH, LOG_PATH
from core.errors import DrillError, ExitCode
from core.sampler import QuestionSampler
from core.session import DrillSession
from core.vocabulary import read_vocabulary

from cli.app import DrillApp
from cli.file_storage import FileStorage

logger = logging.getLogger(__name__)


def setup_logging(path: str) -> None:
    """Log to a file, the terminal belongs to the UI."""
    logging.basicConfig(
        filename=path,
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='verbdrill - verb conjugation practice')
    parser.add_argument(
        '--words',
        default=WORDS_PATH,
        help=f'Vocabulary spreadsheet, .xlsx or .csv (default: {WORDS_PATH})'
    )
    parser.add_argument(
        '--statistics',
        default=STATISTICS_PATH,
        help=f'Statistics file (default: {STATISTICS_PATH})'
    )
    parser.add_argument(
        '--mistakes',
        default=MISTAKES_PATH,
        help=f'Mistake log (default: {MISTAKES_PATH})'
    )
    parser.add_argument(
        '--log',
        default=LOG_PATH,
        help=f'Log file (default: {LOG_PATH})'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for question selection'
    )
    parser.add_argument(
        '--inline',
        action='store_true',
        help='Start in compact mode instead of full screen'
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        setup_logging(args.log)
    except OSError as e:
        print(f'Error: Cannot open log file {args.log}: {e}', file=sys.stderr)
        sys.exit(ExitCode.LOGGING_ERROR)

    logger.info('Starting app...')
    storage = FileStorage(statistics_file=args.statistics, mistakes_file=args.mistakes)
    sampler = QuestionSampler(random.Random(args.seed))
    try:
        table = read_vocabulary(args.words)
        session = DrillSession.start(table, storage, sampler)
    except DrillError as e:
        logger.critical(str(e))
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(e.exit_code)

    logger.info('Starting UI loop...')
    app = DrillApp(session, fullscreen=not args.inline)
    try:
        app.run()
    except Exception:
        logger.exception('Program finished with error')
        sys.exit(ExitCode.UI_ERROR)

    if app.exit_status is None and app.return_code:
        # textual reports an exception raised in a handler as return code 1
        logger.error(f'UI stopped with return code {app.return_code}')
        sys.exit(ExitCode.UI_ERROR)

    return_code = app.exit_status if app.exit_status is not None else ExitCode.OK
    if return_code == ExitCode.OK:
        logger.info('Finished successfully')
    sys.exit(return_code)


if __name__ == '__main__':
    main()
