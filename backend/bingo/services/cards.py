import math
import random
from typing import List, NamedTuple, Optional

from bingo.exceptions import ValidationError


MAX_NUMBER = 75
COLUMN_LETTERS = 'BINGO'
# Inclusive (low, high) per column: B, I, N, G, O
COLUMN_RANGES = [(1, 15), (16, 30), (31, 45), (46, 60), (61, 75)]
COLUMNS = len(COLUMN_RANGES)
CENTER_COL = 2


class BingoCard(NamedTuple):
    numbers: List[int]
    grid: List[Optional[int]]
    rows: int
    cols: int
    center_row: int
    center_col: int

    def cell(self, row: int, col: int) -> Optional[int]:
        return self.grid[row * self.cols + col]

    def is_free_cell(self, row: int, col: int) -> bool:
        return row == self.center_row and col == self.center_col


def validate_card_size(size) -> int:
    if isinstance(size, bool) or (isinstance(size, float) and not size.is_integer()):
        raise ValidationError('Card size must be an integer')
    if not isinstance(size, int):
        try:
            size = int(size)
        except (TypeError, ValueError):
            raise ValidationError('Card size must be an integer')
    if not 1 <= size <= MAX_NUMBER:
        raise ValidationError(f'Card size must be between 1 and {MAX_NUMBER}')
    return size


def column_counts(size: int) -> List[int]:
    """How many numbers each column holds for a card of ``size`` numbers.

    The center column stays at the base count because one of its cells is
    the free cell; the remainder goes to the other columns left to right.
    """
    base, remainder = divmod(size, COLUMNS)
    counts = []
    for col in range(COLUMNS):
        if col == CENTER_COL:
            counts.append(base)
            continue
        position = col if col < CENTER_COL else col - 1
        counts.append(base + 1 if position < remainder else base)
    shortfall = size - sum(counts)
    if shortfall:
        counts[-1] += shortfall
    if sum(counts) != size:
        raise ValueError(f"column counts {counts} do not add up to {size}")
    for col, count in enumerate(counts):
        low, high = COLUMN_RANGES[col]
        if count > high - low + 1:
            raise ValidationError(f'Card size {size} does not fit column {COLUMN_LETTERS[col]}')
    return counts


def generate_card(size: int, rng: Optional[random.Random] = None) -> BingoCard:
    """Build a random card of ``size`` numbers with a free center cell.

    Each column samples without replacement from its own range, sorted
    ascending, and is laid out top to bottom. ``grid`` is the row-major
    flattening so a renderer walking rows sees B, I, N, G, O left to right.
    Both the free cell and cells past a column's supply are ``None``.
    """
    size = validate_card_size(size)
    rng = rng or random
    counts = column_counts(size)

    columns = []
    for (low, high), count in zip(COLUMN_RANGES, counts):
        columns.append(sorted(rng.sample(range(low, high + 1), count)))

    rows = math.ceil((size + 1) / COLUMNS)
    center_row = rows // 2

    matrix = []  # matrix[col][row]
    for col, numbers in enumerate(columns):
        supply = iter(numbers)
        cells = []
        for row in range(rows):
            if row == center_row and col == CENTER_COL:
                cells.append(None)
            else:
                cells.append(next(supply, None))
        matrix.append(cells)

    grid = [matrix[col][row] for row in range(rows) for col in range(COLUMNS)]
    numbers = sorted(n for column in columns for n in column)
    return BingoCard(
        numbers=numbers,
        grid=grid,
        rows=rows,
        cols=COLUMNS,
        center_row=center_row,
        center_col=CENTER_COL,
    )


def format_card(card: BingoCard) -> str:
    """Render a card as a text table, used by the ``card-preview`` command."""
    lines = ['  '.join(f'{letter:>4}' for letter in COLUMN_LETTERS)]
    for row in range(card.rows):
        cells = []
        for col in range(card.cols):
            if card.is_free_cell(row, col):
                cells.append('FREE')
            else:
                value = card.cell(row, col)
                cells.append('' if value is None else str(value))
        lines.append('  '.join(f'{c:>4}' for c in cells))
    return '\n'.join(lines)
