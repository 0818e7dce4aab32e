"""Rich renderables for the drill screens."""

from rich import box
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from core.config import BOX_WIDTH, BOX_HEIGHT, HORIZONTAL_PADDING, VERTICAL_PADDING
from core.models import PromptStats

# 256 colour palette; the first 16 can be redefined by the terminal so they are avoided
LIGHT_PINK1 = 'color(217)'
LIGHT_PINK4 = 'color(95)'
DARK_SEA_GREEN2 = 'color(157)'
DARK_SEA_GREEN4 = 'color(65)'
WHEAT4 = 'color(101)'
BLACK = '#000000'

BACKGROUND = Style(bgcolor=BLACK)
PROMPT_STYLE = BACKGROUND + Style(color=DARK_SEA_GREEN4, italic=True)
QUESTION_STYLE = BACKGROUND + Style(color=DARK_SEA_GREEN2)
QUESTION_STATS_STYLE = BACKGROUND + Style(color=WHEAT4, italic=True)
STATS_STYLE = BACKGROUND + Style(color=DARK_SEA_GREEN4)
CORRECT_STYLE = BACKGROUND + Style(color=DARK_SEA_GREEN2)
WRONG_STYLE = BACKGROUND + Style(color=LIGHT_PINK1)
HELP_MSG_STYLE = BACKGROUND + Style(color=LIGHT_PINK4)
HELP_KEY_STYLE = HELP_MSG_STYLE + Style(bold=True)
BORDER_STYLE = Style(color=LIGHT_PINK4, bgcolor=BLACK)

PROMPT_LABELS = ('Form Clue: ', 'Verb: ', 'Verb Form: ')
CURSOR = '_'

INPUT_HELP = [(['enter'], 'submit'), (['ctrl+s'], 'stats'), (['esc'], 'exit')]
VALIDATION_HELP = [(['enter'], 'next'), (['ctrl+s'], 'stats'), (['esc'], 'exit')]
STATISTICS_HELP = [(['k', '↑'], 'up'), (['j', '↓'], 'down'), (['backspace'], 'back'), (['esc'], 'exit')]


def help_row(entries: list[tuple[list[str], str]]) -> Text:
    """Key binding hints: "enter submit • esc exit"."""
    separator = Text(' • ', style=HELP_MSG_STYLE)
    rendered = [
        Text.assemble(('/'.join(bindings), HELP_KEY_STYLE), (' ' + action, HELP_MSG_STYLE))
        for bindings, action in entries
    ]
    return separator.join(rendered)


def stats_trisymbol(stats: PromptStats, bold: bool = False, italic: bool = False) -> Text:
    """Correct, mistake and streak counters as "3 ● 1 ● 2 ●"."""
    base = BACKGROUND + Style(bold=bold, italic=italic)
    return Text.assemble(
        (f'{stats.correct} ● ', base + Style(color=DARK_SEA_GREEN4)),
        (f'{stats.mistakes} ● ', base + Style(color=LIGHT_PINK4)),
        (f'{stats.streak} ●', base + Style(color=WHEAT4)),
    )


def spread(left: Text, right: Text, width: int = BOX_WIDTH) -> Text:
    """Left text and right text on one line of the given width."""
    left = left.copy()
    left.truncate(max(width - right.cell_len, 0), overflow='ellipsis')
    gap = max(width - left.cell_len - right.cell_len, 0)
    return Text.assemble(left, Text(' ' * gap, style=BACKGROUND), right)


def centered(text: Text, width: int = BOX_WIDTH) -> Text:
    text = text.copy()
    text.align('center', width)
    return text


def boxed(body: list[Text], footer: Text) -> Panel:
    """Fixed size rounded box with the footer on its last line."""
    spacing = max(BOX_HEIGHT - len(body) - 1, 0)
    content = Text('\n', style=BACKGROUND).join(body + [Text('')] * spacing + [footer])
    return Panel(
        content,
        box=box.ROUNDED,
        style=BACKGROUND,
        border_style=BORDER_STYLE,
        padding=(VERTICAL_PADDING, HORIZONTAL_PADDING),
        width=BOX_WIDTH + 2 * HORIZONTAL_PADDING + 2,
        height=BOX_HEIGHT + 2 * VERTICAL_PADDING + 2,
    )


def global_stats_row(session) -> Text:
    trisymbol = stats_trisymbol(session.session_stats, bold=True)
    label = Text.assemble(
        ('Question ', STATS_STYLE),
        (str(session.question_number), STATS_STYLE + Style(bold=True)),
        ('.', STATS_STYLE),
    )
    return spread(label, trisymbol)


def question_rows(session, show_cursor: bool) -> list[Text]:
    label_width = max(len(label) for label in PROMPT_LABELS)
    prompt = session.question.prompt
    answer = session.answer + (CURSOR if show_cursor else '')
    values = (prompt.clue, prompt.verb, answer)
    rows = []
    for label, value in zip(PROMPT_LABELS, values):
        rows.append(Text.assemble(
            (label.rjust(label_width), PROMPT_STYLE),
            (value.ljust(BOX_WIDTH - label_width), QUESTION_STYLE),
        ))
    return rows


def question_stats_row(session) -> Text:
    row = Text.assemble(
        ('[question stats: ', QUESTION_STATS_STYLE),
        stats_trisymbol(session.question_stats, italic=True),
        (']', QUESTION_STATS_STYLE),
    )
    return centered(row)


def validation_row(session) -> Text:
    if session.is_answer_correct():
        row = Text('Correct!', style=CORRECT_STYLE + Style(italic=True))
    else:
        row = Text.assemble(
            ('Wrong!', WRONG_STYLE + Style(italic=True)),
            (' Correct answer is: ', WRONG_STYLE),
            (session.question.correct_answer, WRONG_STYLE + Style(bold=True)),
        )
    return centered(row)


def render_answering(session) -> Panel:
    body = [global_stats_row(session), Text('')]
    body += question_rows(session, show_cursor=True)
    body += [Text(''), Text(''), question_stats_row(session)]
    return boxed(body, help_row(INPUT_HELP))


def render_validation(session) -> Panel:
    body = [global_stats_row(session), Text('')]
    body += question_rows(session, show_cursor=False)
    body += [Text(''), Text(''), validation_row(session)]
    return boxed(body, help_row(VALIDATION_HELP))


def statistics_entry(prompt, stats: PromptStats, selected: bool) -> Text:
    trisymbol = stats_trisymbol(stats, bold=selected, italic=selected)
    if selected:
        bracket = BACKGROUND + Style(color=WHEAT4, italic=True)
        trisymbol = Text.assemble(('[', bracket), trisymbol, (']', bracket))
    else:
        trisymbol = Text.assemble(trisymbol, (' ', BACKGROUND))
    label = f'{prompt.clue} + {prompt.verb}'
    if selected:
        label = '> ' + label
    style = STATS_STYLE + Style(bold=selected, italic=selected)
    return spread(Text(label, style=style), trisymbol)


def render_statistics(view, store) -> Panel:
    body = [Text('Statistics', style=STATS_STYLE), Text('')]
    for prompt, selected in view.visible_rows():
        body.append(statistics_entry(prompt, store.statistics[prompt], selected))
    return boxed(body, help_row(STATISTICS_HELP))
