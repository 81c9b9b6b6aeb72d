"""Startally - a library for tallying STAR elections.

In a STAR (Score Then Automatic Run-off) election, voters score the options
from 0 to 5, the two options with the best scores become finalists and the
finalist preferred on more ballots wins.

The library is organized as follows:

-   The ``vote`` module defines scores and ballots and validates them.
-   The ``election`` module holds the registered options and the ballots cast,
    keeping the per-option ``metrics`` up to date as each ballot arrives.
-   The ``evaluate`` subpackage ranks the options, selects the finalists
    (resolving or reporting ties) and decides the run-off.
-   The :class:`Tally` object from the ``system`` module wraps all of this
    into the interface expected by a voting service: register options,
    submit ballots, compute the result and statistics.
-   The ``io`` subpackage and the ``persist`` module load and store elections.
"""

from startally.election import Election    # noqa
from startally.vote import Ballot, Score    # noqa
from startally.system import Tally, VoteResult    # noqa
