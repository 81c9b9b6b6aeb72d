"""A commandline tool for tallying STAR elections.

Reads the options and ballots from a score table (CSV) or JSON file,
determines the winner and shows the score statistics of all options.
"""

import argparse
import io
import json
import logging
import sys
import warnings
from typing import List, Optional

import startally.io.scoretable
from startally.election import Election
from startally.system import Tally, VoteResult

argparser = argparse.ArgumentParser(
    prog='startally',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load options and ballots from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load options and ballots from standard input',
)
argparser.add_argument(
    '-f', '--input-format',
    choices=['csv', 'json'],
    help='format of input ballot data',
    default='csv',
)
argparser.add_argument(
    '-n', '--name',
    default='',
    help='name of the election to show',
)
argparser.add_argument(
    '-c', '--require-complete',
    action='store_true',
    help='reject ballots that do not score every option',
)
argparser.add_argument(
    '-j', '--json',
    action='store_true',
    dest='json_output',
    help='print the result as JSON',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all evaluator log messages',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any evaluator log messages',
)


def main(input_file: Optional[io.TextIOBase] = None,
         use_stdin: bool = False,
         input_format: str = 'csv',
         name: str = '',
         require_complete: bool = False,
         json_output: bool = False,
         verbose: bool = False,
         quiet: bool = False,
         ) -> Optional[VoteResult]:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    loaded = load_election(input_file, input_format=input_format)
    if len(loaded) == 0:
        warnings.warn('no options given: cannot tally election, terminating')
        return None
    tally = Tally(name=name, require_complete=require_complete)
    for option in loaded.option_ids:
        tally.register(option)
    for ballot in loaded.ballots:
        tally.submit_ballot(ballot)
    report = tally.report()
    if json_output:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        show_report(tally, report)
    return report


def load_election(input_file: io.TextIOBase, input_format: str) -> Election:
    """Load options and ballots from the given file."""
    if input_format == 'csv':
        return startally.io.scoretable.load(input_file)
    elif input_format == 'json':
        return Election.from_dict(json.load(input_file))
    else:
        raise ValueError(
            f'invalid input ballot file format: {input_format}, '
            'supported: csv, json'
        )


def show_report(tally: Tally, report: VoteResult) -> None:
    """Print the result and the statistics in a human-readable form."""
    print()
    print(f'Tallying {tally.name or "a STAR election"}')
    print(f'Received {report.stats.total_ballots} ballots'
          f' for {len(report.stats.options)} options')
    print()
    if report.winner is None:
        print(f'No winner: {report.error}')
    else:
        h2h = report.head_to_head
        print(f'Finalists: {h2h.candidate1} ({h2h.votes1} ballots preferring)'
              f' vs {h2h.candidate2} ({h2h.votes2} ballots preferring)')
        print(f'Elected:   {report.winner}')
        for matchup in report.result.matchups:
            print(f'           {matchup.candidate1} vs {matchup.candidate2}:'
                  f' {matchup.votes1} to {matchup.votes2}')
    print()
    print('Option statistics:')
    name_width = max(len(str(opt.option)) for opt in report.stats.options)
    for opt_stats in report.stats.options:
        frequency = ' '.join(
            f'{score}:{count}' for score, count in opt_stats.frequency.items()
        )
        print(f'{str(opt_stats.option).ljust(name_width)}'
              f'  total {opt_stats.total_score:>5}'
              f'  mean {float(opt_stats.average_score):5.2f}'
              f'  scored by {opt_stats.ballot_count:>4}'
              f'  [{frequency}]')


def run(argv: Optional[List[str]] = None) -> None:
    args = argparser.parse_args(argv)
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
    else:
        main(**vars(args))


if __name__ == '__main__':
    run()
