from typing import Iterator

# Direction bits, clockwise from NORTH
NORTH = 0b00000001
EAST  = 0b00000010
SOUTH = 0b00000100
WEST  = 0b00001000

# Status bits
VISITED  = 0b00010000
ROTATING = 0b00100000

DIRECTION_MASK = NORTH | EAST | SOUTH | WEST
STATUS_MASK = VISITED | ROTATING
CELL_MASK = DIRECTION_MASK | STATUS_MASK

DIRECTION_COUNT = 4

# Direction Helpers
DX = {NORTH: 0, SOUTH: 0, EAST: 1, WEST: -1}
DY = {NORTH: -1, SOUTH: 1, EAST: 0, WEST: 0}
OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}


def decode_connections(cell: int) -> int:
    return cell & DIRECTION_MASK


def decode_status(cell: int) -> int:
    return cell & STATUS_MASK


def encode(connections: int, status: int = 0) -> int:
    if connections & ~DIRECTION_MASK:
        raise ValueError(f"Connection bits out of range: {connections:#x}")
    if status & ~STATUS_MASK:
        raise ValueError(f"Status bits out of range: {status:#x}")
    return connections | status


def directions(bits: int) -> Iterator[int]:
    """Yields each direction bit set in 'bits' (N, E, S, W order)."""
    for direction in (NORTH, EAST, SOUTH, WEST):
        if bits & direction:
            yield direction


def rotate(connections: int, steps: int = 1) -> int:
    """
    Rotates a connection pattern clockwise by steps * 90 degrees.
    The four direction bits are treated as a ring: N -> E -> S -> W -> N.
    """
    if connections & ~DIRECTION_MASK:
        raise ValueError(f"Cannot rotate status bits: {connections:#x}")
    steps %= DIRECTION_COUNT
    rotated = (connections << steps) | (connections >> (DIRECTION_COUNT - steps))
    return rotated & DIRECTION_MASK


def rotate_cell(cell: int, steps: int = 1) -> int:
    return rotate(decode_connections(cell), steps) | decode_status(cell)


def popcount(bits: int) -> int:
    c = 0
    for _ in directions(bits):
        c += 1
    return c
