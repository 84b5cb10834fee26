import struct
from typing import Iterator, Tuple

# Event Types
EVT_START_ROTATION = 0x01
EVT_END_ROTATION = 0x02

MAGIC = b"PIPELOG"


class EventWriter:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "wb")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def write_header(self, columns: int, cell_count: int):
        # Header: Magic "PIPELOG" + Columns (4b) + Cell Count (4b)
        self.file.write(MAGIC)
        self.file.write(struct.pack(">II", columns, cell_count))

    def log_start_rotation(self, index: int):
        # 1 byte type + 4 byte index
        self.file.write(struct.pack(">BI", EVT_START_ROTATION, index))

    def log_end_rotation(self, index: int):
        self.file.write(struct.pack(">BI", EVT_END_ROTATION, index))

    def close(self):
        if self.file:
            self.file.close()
            self.file = None


class EventReader:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "rb")
        self.columns = 0
        self.cell_count = 0

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def read_header(self) -> Tuple[int, int]:
        magic = self.file.read(len(MAGIC))
        if magic != MAGIC:
            raise ValueError("Invalid event log file")
        data = self.file.read(8)
        if len(data) != 8:
            raise ValueError("Truncated event log header")
        self.columns, self.cell_count = struct.unpack(">II", data)
        return self.columns, self.cell_count

    def stream_events(self) -> Iterator[Tuple[int, int]]:
        while True:
            type_byte = self.file.read(1)
            if not type_byte:
                break

            type_code = ord(type_byte)
            if type_code not in (EVT_START_ROTATION, EVT_END_ROTATION):
                raise ValueError(f"Unknown event type {type_code:#x}")

            data = self.file.read(4)
            if len(data) != 4:
                raise ValueError("Truncated event record")
            (index,) = struct.unpack(">I", data)
            yield (type_code, index)

    def close(self):
        if self.file:
            self.file.close()
            self.file = None
