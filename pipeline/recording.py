"""
Skeleton recordings.

One SkeletonFrame per line, JSON encoded:

    {"frame_number": 1, "timestamp": 0.033, "skeletons": [{"tracking_id": 0,
     "tracking_state": "tracked", "position": [x, y, z], "clipped_edges": 0,
     "joints": {"shoulder_left": {"position": [x, y, z],
                                  "tracking_state": "tracked"}, ...}}]}

Recordings let a session be classified again offline, e.g. with a different
target angle.
"""

import json
from pathlib import Path
from typing import Iterator, Union

from pipeline.skeleton import SkeletonFrame


class RecordingError(ValueError):
    """Raised when a recording line cannot be decoded."""


class SkeletonRecorder:
    """Append skeleton frames to a JSON-lines file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "w", encoding="utf-8")
        self.frames_written = 0

    def write(self, frame: SkeletonFrame) -> None:
        self._file.write(json.dumps(frame.to_dict()) + "\n")
        self.frames_written += 1

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def read_recording(path: Union[str, Path]) -> Iterator[SkeletonFrame]:
    """
    Yield the frames of a recording in file order.

    Blank lines are skipped.

    Raises:
        RecordingError: a line is not valid JSON or not a valid frame
    """
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                frame = SkeletonFrame.from_dict(json.loads(line))
            except (ValueError, KeyError, TypeError) as e:
                raise RecordingError(f"{path}:{line_no}: {e}") from e
            yield frame
