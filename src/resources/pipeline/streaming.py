"""Accumulation of incrementally generated text.

Generation providers hand back a lazy, finite, non-restartable sequence of
text fragments. :func:`accumulate_text` folds that sequence into a single
string in arrival order and optionally mirrors each fragment to a sink (for
example a live console) without affecting the returned value.
"""

from __future__ import annotations

import sys
from collections.abc import AsyncIterable, Callable


TextSink = Callable[[str], None]
"""Receives each fragment as it arrives."""


class StreamedText:
    """Ordered accumulator of text fragments."""

    def __init__(self) -> None:
        self._fragments: list[str] = []
        self._text: str | None = None

    @property
    def finalized(self) -> bool:
        return self._text is not None

    @property
    def fragment_count(self) -> int:
        return len(self._fragments)

    def append(self, fragment: str) -> None:
        if self._text is not None:
            raise RuntimeError("cannot append to finalized streamed text")
        self._fragments.append(fragment)

    def finalize(self) -> str:
        """Join the fragments once; later calls return the same string."""
        if self._text is None:
            self._text = "".join(self._fragments)
        return self._text


def console_sink(fragment: str) -> None:
    """Echo a fragment to stdout immediately."""
    sys.stdout.write(fragment)
    sys.stdout.flush()


async def accumulate_text(chunks: AsyncIterable[str], sink: TextSink | None = None) -> str:
    """Consume ``chunks`` and return their concatenation."""
    text = StreamedText()
    async for chunk in chunks:
        if sink is not None:
            sink(chunk)
        text.append(chunk)
    return text.finalize()


__all__ = ["StreamedText", "TextSink", "accumulate_text", "console_sink"]
