"""Configuration constants for verbdrill application."""

# Default file locations (relative to the working directory)
WORDS_PATH = 'words.xlsx'
LOG_PATH = 'log'
MISTAKES_PATH = 'mistakes'
STATISTICS_PATH = 'statistics.json'

# Statistics keys are "<clue>+<verb>", so neither part may contain it
PROMPT_SEPARATOR = '+'

# Persisted counters are unsigned 16 bit
UINT16_MAX = 65535

# Weighted draw retries after a floating point miss
SAMPLER_MAX_RETRIES = 1000

# Answer input
ANSWER_CHAR_LIMIT = 30

# Box geometry (terminal cells)
BOX_WIDTH = 45
BOX_HEIGHT = 12
HORIZONTAL_PADDING = 3
VERTICAL_PADDING = 1

# Statistics list
STATISTICS_ROWS = BOX_HEIGHT - 2 - 2  # minus title and help rows
SCROLL_MARGIN = 2                     # rows kept visible past the selection
