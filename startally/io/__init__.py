"""Input/output of elections in ballot file formats.

This subpackage is structured into modules by file format. Each format
module provides ``load()`` and ``loads()`` functions returning a
:class:`startally.election.Election` and ``dump()`` and ``dumps()`` functions
writing one out. JSON storage of elections is provided by
:mod:`startally.persist` instead.
"""
