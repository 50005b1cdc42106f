"""Append-only transcript of rendered console lines."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, Optional

TranscriptListener = Callable[[tuple[str, ...]], None]


class Transcript:
    """Ordered log of lines; ``clear`` is the only way to remove any."""

    def __init__(
        self,
        lines: Iterable[str] = (),
        *,
        on_change: Optional[TranscriptListener] = None,
    ) -> None:
        self._lines: List[str] = list(lines)
        self.on_change = on_change

    def append(self, line: str) -> None:
        self._lines.append(line)
        self._changed()

    def extend(self, lines: Iterable[str]) -> None:
        added = list(lines)
        if not added:
            return
        self._lines.extend(added)
        self._changed()

    def clear(self) -> None:
        self._lines.clear()
        self._changed()

    def snapshot(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> str:
        return self._lines[index]

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self.snapshot())
