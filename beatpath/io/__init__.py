"""Input/output of ballot snapshots and tabulation results.

The tabulation itself owns no file format; this subpackage provides a simple
JSON snapshot format (:mod:`beatpath.io.snapshot`) so that exported ballots
can be tabulated from the command line.
"""
