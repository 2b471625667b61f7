# /usr/bin/env python3

# split procfs text into whitespace delimited tokens, line by line

import dataclasses
from typing import Iterator, Tuple


@dataclasses.dataclass(frozen=True)
class TokenizedLine:
    # 1 based line number in the source text.
    lineno: int
    # The line as found in the source, w/o the line terminator.
    text: str
    tokens: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.tokens)

    @property
    def label(self) -> str:
        return self.tokens[0] if self.tokens else ""


class TokenizedText:
    """Lazy, restartable view of a text blob as a sequence of TokenizedLine.

    Each iteration walks the text from the start again. Blank lines are not
    dropped, they are returned w/ no tokens and the decoders decide about them.
    """

    def __init__(self, text: str):
        self._text = text

    def __iter__(self) -> Iterator[TokenizedLine]:
        # Only `\n' ends a line; str.splitlines() would also split on \f, \v,
        # \x1c-\x1e, \x85 and \u2028, shifting the line numbers.
        lines = self._text.split("\n")
        if lines[-1] == "":
            lines.pop()
        for lineno, line in enumerate(lines, start=1):
            yield TokenizedLine(lineno=lineno, text=line, tokens=tuple(line.split()))


def tokenize(text: str) -> TokenizedText:
    return TokenizedText(text)
