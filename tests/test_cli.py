"""Tests for the terminal surface and file storage."""

import io
import json
import os
import random
import tempfile
import unittest
from unittest import mock

from rich.console import Console

from core.errors import ExitCode, StatisticsFileError
from core.models import Prompt, PromptStats, Question
from core.sampler import QuestionSampler
from core.session import DrillSession, Mode
from core.vocabulary import VocabularyTable

from cli.__main__ import main
from cli.app import DrillApp
from cli.file_storage import FileStorage
from cli.screens import DrillController, Effect, ScreenKind, StatisticsView


def single_prompt_table():
    return VocabularyTable(['3sg'], ['run'], [['runs']])


def render_text(renderable) -> str:
    console = Console(file=io.StringIO(), width=80, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


class StorageTestCase(unittest.TestCase):
    """Base class providing FileStorage in a temporary directory."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.storage = FileStorage(
            statistics_file=self.path('statistics.json'),
            mistakes_file=self.path('mistakes')
        )

    def tearDown(self):
        self.tmpdir.cleanup()

    def path(self, name):
        return os.path.join(self.tmpdir.name, name)

    def make_session(self, table=None):
        return DrillSession.start(table or single_prompt_table(), self.storage, QuestionSampler(random.Random(0)))


class TestFileStorage(StorageTestCase):
    """Tests for FileStorage."""

    def test_missing_file_is_no_history(self):
        self.assertIsNone(self.storage.load_statistics())

    def test_save_and_load(self):
        data = {'Statistics': {'3sg+run': {'Streak': 1, 'Correct': 1, 'Mistakes': 0, 'Answer': 'runs'}}}
        self.storage.save_statistics(data)
        self.assertEqual(self.storage.load_statistics(), data)
        self.assertFalse(os.path.exists(self.path('statistics.json.tmp')))

    def test_non_ascii_kept_readable(self):
        self.storage.save_statistics({'Statistics': {'ich+sein': {'Answer': 'bin'}, 'er+müssen': {'Answer': 'muss'}}})
        with open(self.path('statistics.json'), encoding='utf-8') as f:
            self.assertIn('müssen', f.read())

    def test_invalid_json_is_fatal(self):
        with open(self.path('statistics.json'), 'w') as f:
            f.write('{not json')
        with self.assertRaises(StatisticsFileError):
            self.storage.load_statistics()

    def test_non_utf8_file_is_fatal(self):
        with open(self.path('statistics.json'), 'wb') as f:
            f.write(b'\xff\xfe garbage')
        with self.assertRaises(StatisticsFileError):
            self.storage.load_statistics()

    def test_non_object_json_is_fatal(self):
        for content in ('null', '[]', '3'):
            with open(self.path('statistics.json'), 'w') as f:
                f.write(content)
            with self.assertRaises(StatisticsFileError):
                self.storage.load_statistics()

    def test_save_to_missing_directory_raises(self):
        storage = FileStorage(statistics_file=self.path('missing/statistics.json'))
        with self.assertRaises(OSError):
            storage.save_statistics({})

    def test_log_mistake_appends(self):
        question = Question(Prompt('3sg', 'run'), 'runs')
        self.storage.log_mistake(question, 'run')
        self.storage.log_mistake(question, 'ran')
        with open(self.path('mistakes'), encoding='utf-8') as f:
            content = f.read()
        self.assertEqual(
            content,
            'Question 3sg + run:\n    Correct: runs\n    Answer: run\n\n'
            'Question 3sg + run:\n    Correct: runs\n    Answer: ran\n\n'
        )

    def test_log_mistake_failure_is_not_fatal(self):
        storage = FileStorage(mistakes_file=self.tmpdir.name)  # a directory
        with self.assertLogs('cli.file_storage', level='ERROR'):
            storage.log_mistake(Question(Prompt('3sg', 'run'), 'runs'), 'ran')

    def test_session_save_failure(self):
        session = self.make_session()
        session.storage = FileStorage(statistics_file=self.path('missing/statistics.json'))
        session.type_text('runs')
        session.submit()
        with self.assertLogs('core.session', level='ERROR'):
            self.assertFalse(session.save())

    def test_session_writes_file(self):
        session = self.make_session()
        session.type_text('runs')
        session.submit()
        self.assertTrue(session.save())
        with open(self.path('statistics.json'), encoding='utf-8') as f:
            data = json.load(f)
        self.assertEqual(data['Statistics']['3sg+run']['Streak'], 1)


class TestStatisticsView(unittest.TestCase):
    """Tests for statistics list scrolling."""

    def prompts(self, count):
        return [Prompt(f'c{i}', 'run') for i in range(count)]

    def test_moves_selection_before_scrolling(self):
        view = StatisticsView(self.prompts(20))
        for _ in range(5):
            view.scroll_down()
        self.assertEqual((view.first_shown_index, view.selected_row), (0, 5))
        view.scroll_down()
        self.assertEqual((view.first_shown_index, view.selected_row), (1, 5))

    def test_scroll_up_keeps_margin(self):
        view = StatisticsView(self.prompts(20))
        for _ in range(10):
            view.scroll_down()
        self.assertEqual((view.first_shown_index, view.selected_row), (5, 5))
        for _ in range(3):
            view.scroll_up()
        self.assertEqual((view.first_shown_index, view.selected_row), (5, 2))
        view.scroll_up()
        self.assertEqual((view.first_shown_index, view.selected_row), (4, 2))

    def test_stops_at_end(self):
        view = StatisticsView(self.prompts(20))
        for _ in range(40):
            view.scroll_down()
        self.assertEqual(view.selected_index, 19)
        self.assertEqual((view.first_shown_index, view.selected_row), (12, 7))

    def test_stops_at_top(self):
        view = StatisticsView(self.prompts(20))
        view.scroll_down()
        for _ in range(5):
            view.scroll_up()
        self.assertEqual((view.first_shown_index, view.selected_row), (0, 0))

    def test_short_list(self):
        view = StatisticsView(self.prompts(3))
        for _ in range(5):
            view.scroll_down()
        self.assertEqual(view.selected_index, 2)
        rows = view.visible_rows()
        self.assertEqual(len(rows), 3)
        self.assertEqual(rows[2], (Prompt('c2', 'run'), True))


class TestDrillController(StorageTestCase):
    """Tests for key handling across screens."""

    def setUp(self):
        super().setUp()
        self.session = self.make_session()
        self.controller = DrillController(self.session)

    def type(self, text):
        for character in text:
            self.controller.handle_key(character, character)

    def test_starts_answering(self):
        self.assertEqual(self.controller.kind, ScreenKind.ANSWERING)

    def test_typing_and_backspace(self):
        self.type('runx')
        self.controller.handle_key('backspace')
        self.assertEqual(self.session.answer, 'run')

    def test_letters_used_for_scrolling_are_typed(self):
        self.type('jk')
        self.assertEqual(self.session.answer, 'jk')

    def test_submit_then_next(self):
        self.type('runs')
        self.assertEqual(self.controller.handle_key('enter'), Effect.NONE)
        self.assertEqual(self.controller.kind, ScreenKind.VALIDATION)
        self.assertEqual(self.session.correct_answers, 1)
        self.controller.handle_key('enter')
        self.assertEqual(self.controller.kind, ScreenKind.ANSWERING)
        self.assertEqual(self.session.answer, '')

    def test_statistics_and_back(self):
        self.type('ru')
        self.controller.handle_key('ctrl+s')
        self.assertEqual(self.controller.kind, ScreenKind.STATISTICS)
        self.type('x')
        self.controller.handle_key('backspace')
        self.assertEqual(self.controller.kind, ScreenKind.ANSWERING)
        self.assertEqual(self.session.answer, 'ru')

    def test_statistics_from_validation(self):
        self.controller.handle_key('enter')
        self.controller.handle_key('ctrl+s')
        self.assertEqual(self.controller.kind, ScreenKind.STATISTICS)
        self.controller.handle_key('ctrl+s')
        self.assertEqual(self.controller.kind, ScreenKind.VALIDATION)

    def test_quit_keys(self):
        for key in ('escape', 'ctrl+c', 'ctrl+q'):
            self.assertEqual(self.controller.handle_key(key), Effect.QUIT)

    def test_fullscreen_key(self):
        self.assertEqual(self.controller.handle_key('ctrl+a'), Effect.TOGGLE_FULLSCREEN)


class TestRendering(StorageTestCase):
    """Tests for the rendered screens."""

    def setUp(self):
        super().setUp()
        self.session = self.make_session()
        self.controller = DrillController(self.session)

    def test_answering_screen(self):
        self.session.type_text('ru')
        text = render_text(self.controller.render())
        self.assertIn('Question 1.', text)
        self.assertIn('Form Clue: 3sg', text)
        self.assertIn('Verb: run', text)
        self.assertIn('Verb Form: ru_', text)
        self.assertIn('[question stats: 0 ● 0 ● 0 ●]', text)
        self.assertIn('enter submit • ctrl+s stats • esc exit', text)

    def test_correct_validation_screen(self):
        self.session.type_text('runs')
        self.session.submit()
        text = render_text(self.controller.render())
        self.assertIn('Correct!', text)
        self.assertIn('enter next', text)
        self.assertIn('1 ● 0 ● 1 ●', text)

    def test_wrong_validation_screen(self):
        self.session.type_text('ran')
        self.session.submit()
        text = render_text(self.controller.render())
        self.assertIn('Wrong! Correct answer is: runs', text)

    def test_statistics_screen(self):
        self.session.type_text('runs')
        self.session.submit()
        self.controller.handle_key('ctrl+s')
        text = render_text(self.controller.render())
        self.assertIn('Statistics', text)
        self.assertIn('> 3sg + run', text)
        self.assertIn('[1 ● 0 ● 1 ●]', text)
        self.assertIn('k/↑ up', text)

    def test_box_has_fixed_height(self):
        first = render_text(self.controller.render())
        self.controller.handle_key('ctrl+s')
        second = render_text(self.controller.render())
        self.assertEqual(len(first.splitlines()), len(second.splitlines()))


class TestDrillApp(unittest.IsolatedAsyncioTestCase):
    """Drives the textual app with simulated key presses."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.storage = FileStorage(
            statistics_file=os.path.join(self.tmpdir.name, 'statistics.json'),
            mistakes_file=os.path.join(self.tmpdir.name, 'mistakes')
        )
        self.session = DrillSession.start(single_prompt_table(), self.storage)

    def tearDown(self):
        self.tmpdir.cleanup()

    async def test_answer_and_quit_saves(self):
        app = DrillApp(self.session)
        async with app.run_test() as pilot:
            await pilot.press('r', 'u', 'n', 's')
            await pilot.press('enter')
            self.assertEqual(self.session.mode, Mode.VALIDATION)
            self.assertEqual(self.session.question_stats, PromptStats(1, 1, 0))
            await pilot.press('escape')
        self.assertTrue(app.saved)
        self.assertEqual(app.return_code, 0)
        self.assertEqual(app.exit_status, ExitCode.OK)
        self.assertEqual(self.storage.load_statistics()['Statistics']['3sg+run']['Correct'], 1)

    async def test_toggle_fullscreen(self):
        app = DrillApp(self.session)
        async with app.run_test() as pilot:
            self.assertTrue(app.screen.has_class('-fullscreen'))
            await pilot.press('ctrl+a')
            self.assertFalse(app.fullscreen)
            self.assertFalse(app.screen.has_class('-fullscreen'))
            await pilot.press('ctrl+c')
        self.assertTrue(app.saved)


class StoppedApp:
    """Stands in for DrillApp; run() returns at once with preset codes."""

    return_code = 1
    exit_status = None

    def __init__(self, session, fullscreen=True):
        self.session = session

    def run(self):
        pass


class TestMain(StorageTestCase):
    """Exit statuses of the entry point."""

    def setUp(self):
        super().setUp()
        patcher = mock.patch('cli.__main__.setup_logging')
        patcher.start()
        self.addCleanup(patcher.stop)

    def write_words(self, rows):
        with open(self.path('words.csv'), 'w', newline='', encoding='utf-8') as f:
            for row in rows:
                f.write(','.join(row) + '\n')

    def run_main(self):
        argv = [
            '--words', self.path('words.csv'),
            '--statistics', self.path('statistics.json'),
            '--mistakes', self.path('mistakes'),
            '--log', self.path('log'),
        ]
        with mock.patch('sys.stderr', io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(argv)
        return ctx.exception.code

    def test_missing_vocabulary(self):
        self.assertEqual(self.run_main(), ExitCode.DATABASE_ERROR)

    def test_bad_statistics_key(self):
        self.write_words([['', 'verb', '3sg'], ['', 'run', 'runs']])
        with open(self.path('statistics.json'), 'w') as f:
            json.dump({'Statistics': {'a+b+c': {'Answer': 'x'}}}, f)
        self.assertEqual(self.run_main(), ExitCode.STATISTICS_ERROR)

    def test_empty_vocabulary(self):
        self.write_words([['', 'verb', '3sg'], ['', 'run', '']])
        self.assertEqual(self.run_main(), ExitCode.EMPTY_VOCABULARY)

    def test_ui_failure(self):
        self.write_words([['', 'verb', '3sg'], ['', 'run', 'runs']])
        with mock.patch('cli.__main__.DrillApp', StoppedApp):
            self.assertEqual(self.run_main(), ExitCode.UI_ERROR)

    def test_drill_exit_status_used(self):
        self.write_words([['', 'verb', '3sg'], ['', 'run', 'runs']])
        app = mock.Mock(return_code=int(ExitCode.STATISTICS_ERROR), exit_status=ExitCode.STATISTICS_ERROR)
        with mock.patch('cli.__main__.DrillApp', return_value=app):
            self.assertEqual(self.run_main(), ExitCode.STATISTICS_ERROR)
        app.run.assert_called_once()


if __name__ == '__main__':
    unittest.main()
