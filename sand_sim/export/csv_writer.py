"""Per-step metrics log for the sand simulation."""

import csv
from pathlib import Path
from typing import IO, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import SimulationState

FIELDNAMES = ['step', 'full_cells', 'moved', 'gravity_x', 'gravity_y',
              'center_x', 'center_y']


class CSVWriter:
    """
    Appends one metrics row per step, flushing as it goes so a run
    interrupted with Ctrl-C still leaves a readable log.
    """

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self._file: Optional[IO[str]] = None
        self._writer: Optional[csv.DictWriter] = None

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def open(self) -> None:
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.output_path, 'w', newline='')
        self._writer = csv.DictWriter(self._file, fieldnames=FIELDNAMES)
        self._writer.writeheader()

    def append(self, state: "SimulationState") -> None:
        if not self.is_open:
            self.open()
        self._writer.writerow(state.to_csv_row())
        self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
        self._file = None
        self._writer = None

    def __enter__(self) -> "CSVWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
