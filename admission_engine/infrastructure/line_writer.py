# admission_engine/infrastructure/line_writer.py

import threading
from typing import Optional, TextIO


class FileLineWriter:
    """Thread-safe line writer backed by a text file."""

    def __init__(self, path: str):
        self.path = path
        self._file: Optional[TextIO] = None
        self._lock = threading.Lock()

    def open(self) -> "FileLineWriter":
        self._file = open(self.path, "w", encoding="utf-8")
        return self

    def __call__(self, line: str) -> None:
        with self._lock:
            if self._file is None:
                raise RuntimeError(f"{self.path} is not open")
            self._file.write(line + "\n")
            self._file.flush()

    def close(self) -> None:
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def __enter__(self) -> "FileLineWriter":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
