"""Read and write score table files.

A score table is a comma-separated file whose header row lists the option
names; every following row is a single ballot giving the scores in the
order of the header. An empty cell means the voter did not rate the option::

    Alice,Bob,Carol
    5,4,0
    3,,5

Option names are read as strings; other identifiers are written using their
``str()`` form and therefore come back as strings.
"""

import csv
import io
import logging
from typing import Iterable, List

import startally.io.core
from startally.candidate import CandidateError
from startally.election import Election
from startally.vote import VoteError


logger = logging.getLogger(__name__)


class ScoreTableParseError(startally.io.core.ParseError):
    pass


def parse_lines(lines: Iterable[str], delimiter: str = ',') -> Election:
    """Load options and ballots from score table lines.

    :param lines: Lines of the file.
    :param delimiter: Cell separator.
    :raises ScoreTableParseError: If the table is malformed or contains
        an invalid score.
    """
    reader = csv.reader(lines, delimiter=delimiter)
    election = None
    header: List[str] = []
    for row in reader:
        if not row:
            continue
        cells = [cell.strip() for cell in row]
        if election is None:
            header = cells
            election = _parse_header(header, reader.line_num)
            continue
        if len(cells) > len(header):
            raise ScoreTableParseError(
                f'{len(cells)} cells for {len(header)} options',
                reader.line_num
            )
        scores = {}
        for option, cell in zip(header, cells):
            if cell:
                try:
                    scores[option] = int(cell)
                except ValueError:
                    raise ScoreTableParseError(
                        f'score is not a whole number: {cell!r}',
                        reader.line_num
                    ) from None
        try:
            election.cast_ballot(scores)
        except VoteError as err:
            raise ScoreTableParseError(str(err), reader.line_num) from err
    if election is None:
        raise ScoreTableParseError('missing header row with option names')
    logger.info('loaded %d options and %d ballots',
                len(election), len(election.ballots))
    return election


def _parse_header(cells: List[str], line_no: int) -> Election:
    if not all(cells):
        raise ScoreTableParseError('empty option name in header', line_no)
    try:
        return Election(cells)
    except CandidateError as err:
        raise ScoreTableParseError(str(err), line_no) from err


def dump_lines(election: Election, delimiter: str = ',') -> Iterable[str]:
    """Dump the options and ballots of the election as a score table.

    :param election: Election to dump.
    :param delimiter: Cell separator.
    """
    options = election.option_ids
    yield _format_row([str(option) for option in options], delimiter)
    for ballot in election.ballots:
        yield _format_row([
            str(int(ballot[option])) if option in ballot else ''
            for option in options
        ], delimiter)


def _format_row(cells: List[str], delimiter: str) -> str:
    buffer = io.StringIO()
    csv.writer(
        buffer, delimiter=delimiter, lineterminator='\n'
    ).writerow(cells)
    return buffer.getvalue()


load, loads = startally.io.core.loaders(parse_lines)
dump, dumps = startally.io.core.dumpers(dump_lines)
