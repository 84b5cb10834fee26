from dataclasses import dataclass, replace as dc_replace
from typing import Iterable, Optional, Sequence, Tuple

from pipe_maze.core import cell as c


@dataclass(frozen=True)
class Maze:
    """
    Immutable snapshot of a pipe maze.
    Cells are stored row-major: index = y * columns + x.
    Each cell is one byte: connection bits (0-3) | status bits (4-5).
    """
    columns: int
    cells: Tuple[int, ...]

    def __post_init__(self):
        cells = tuple(self.cells)
        if self.columns <= 0:
            raise ValueError(f"Columns must be positive, got {self.columns}")
        if not cells:
            raise ValueError("Maze needs at least one cell")
        if len(cells) % self.columns != 0:
            raise ValueError(f"Cell count {len(cells)} is not a multiple of {self.columns} columns")
        for i, val in enumerate(cells):
            if val < 0 or val & ~c.CELL_MASK:
                raise ValueError(f"Cell {i} has bits out of range: {val:#x}")
        # Frozen dataclass: bypass __setattr__ to normalise lists to tuples
        object.__setattr__(self, 'cells', cells)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Maze":
        if not rows:
            raise ValueError("Maze needs at least one row")
        columns = len(rows[0])
        for row in rows:
            if len(row) != columns:
                raise ValueError("Rows must all have the same length")
        return cls(columns, tuple(v for row in rows for v in row))

    @property
    def rows(self) -> int:
        return len(self.cells) // self.columns

    @property
    def size(self) -> int:
        return len(self.cells)

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.columns and 0 <= y < self.rows:
            return y * self.columns + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def check_index(self, index: int) -> int:
        if not 0 <= index < len(self.cells):
            raise IndexError(f"Cell index {index} out of bounds (size {len(self.cells)})")
        return index

    def neighbor(self, index: int, direction: int) -> Optional[int]:
        """Index of the cell next to 'index' in 'direction', None past the border."""
        x = index % self.columns + c.DX[direction]
        y = index // self.columns + c.DY[direction]
        if 0 <= x < self.columns and 0 <= y < self.rows:
            return y * self.columns + x
        return None

    def replace(self, index: int, value: int) -> "Maze":
        self.check_index(index)
        cells = list(self.cells)
        cells[index] = value
        return dc_replace(self, cells=tuple(cells))

    def with_cells(self, cells: Iterable[int]) -> "Maze":
        return dc_replace(self, cells=tuple(cells))

    @property
    def visited_count(self) -> int:
        return sum(1 for val in self.cells if val & c.VISITED)

    @property
    def finished(self) -> bool:
        return self.visited_count == len(self.cells)

    def dump(self) -> str:
        lines = []
        for y in range(self.rows):
            row = []
            for val in self.cells[y * self.columns:(y + 1) * self.columns]:
                mark = '~' if val & c.ROTATING else ('*' if val & c.VISITED else ' ')
                row.append(f"{c.decode_connections(val):x}{mark}")
            lines.append(' '.join(row))
        return '\n'.join(lines)
