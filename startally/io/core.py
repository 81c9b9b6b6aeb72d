"""Shared functionality for ballot file I/O. Internal."""

import typing
from typing import Any, Callable, Iterable, TextIO, Tuple


class ParseError(Exception):
    """An input that is invalid according to the given format was detected.

    :param message: Description of the problem.
    :param line_no: Number of the offending line (1-based), if known.
    """
    def __init__(self, message: str, line_no: int = None):
        self.line_no = line_no
        if line_no is not None:
            message = f'line {line_no}: {message}'
        super().__init__(message)


def loaders(line_loader: Callable[..., Any]
            ) -> Tuple[Callable[..., Any], Callable[..., Any]]:
    """Create load() and loads() functions from an iterating function."""
    return_annot = typing.get_type_hints(line_loader).get('return')
    if return_annot is None:
        return_annot = Any

    def load(file: TextIO, **kwargs) -> return_annot:
        return line_loader(file, **kwargs)

    def loads(text: str, **kwargs) -> return_annot:
        return line_loader(iter(text.splitlines()), **kwargs)

    return load, loads


def dumpers(line_dumper: Callable[..., Iterable[str]]
            ) -> Tuple[Callable[..., None], Callable[..., str]]:
    """Create dump() and dumps() functions from a line generator function."""

    def dump(file: TextIO, *args, **kwargs) -> None:
        for line in line_dumper(*args, **kwargs):
            if not line.endswith('\n'):
                line += '\n'
            file.write(line)

    def dumps(*args, **kwargs) -> str:
        return ''.join(
            line + ('' if line.endswith('\n') else '\n')
            for line in line_dumper(*args, **kwargs)
        )

    return dump, dumps
