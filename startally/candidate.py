'''Option identifiers and errors concerning them.

Any hashable object that is not a set or a tuple can identify an option
(a candidate) in an election; strings are the most common choice. The
:class:`Candidate` class is only a type marker that recognizes such objects.
'''

import abc
import collections.abc
from typing import Any


class CandidateError(Exception):
    '''An option identifier is invalid in the given context.

    :param candidate: Option that was found to be invalid.
    :param expected: Definition of an option that was expected.
    '''
    code: str = 'invalid_candidate'
    description: str = 'the option is invalid'

    def __init__(self, candidate: Any, expected: Any = None):
        self.candidate = candidate
        self.expected = expected
        super().__init__(self._message())

    def _message(self) -> str:
        message = f'invalid candidate: {self.candidate!r}'
        if self.expected:
            message += f', must be {self.expected}'
        return message


class InvalidOption(CandidateError):
    '''A ballot scores an option that is not registered in the election.'''
    code = 'invalid_option'
    description = 'the ballot scores an option that is not on the ballot'

    def _message(self) -> str:
        return f'invalid option: {self.candidate!r}'


class DuplicateOption(CandidateError):
    '''An option is registered in the election for the second time.'''
    code = 'duplicate_option'
    description = 'the option is already registered'

    def _message(self) -> str:
        return f'duplicate option: {self.candidate!r}'


class Candidate(metaclass=abc.ABCMeta):
    '''An abstract marker class for option identifiers.

    The subclass check is overridden so that any hashable object that is not
    a set or tuple is accepted.
    '''
    @classmethod
    def __subclasshook__(cls, subcl):
        if cls is Candidate:
            return (
                hasattr(subcl, '__hash__')
                and subcl.__hash__ is not None
                and not issubclass(subcl, collections.abc.Set)
                and not issubclass(subcl, tuple)
            )
        else:
            return NotImplemented
