"""Beatpath - Schulze method tabulation of ranked ballots.

Beatpath takes a closed snapshot of ranked ballots cast in one election and
determines the winners by the Schulze method, together with a total ranking
of all candidates.

The main pieces are:

-   Ranked ballots and their validation, in the ``ballot`` module. The
    tabulation refuses the whole snapshot if any ballot ranks a candidate
    twice or has gaps in its rank positions.
-   The pairwise tally in the ``convert`` module, counting for every pair of
    candidates how many ballots prefer one to the other.
-   The Schulze evaluator in :mod:`evaluate.schulze`, deriving the strongest
    paths, the winners and the ranking. Use its
    :func:`compute_schulze_result` for a one-off tabulation.
-   The result objects in the ``result`` module, ready to be serialized by a
    presentation layer.

The engine keeps no state between tabulations and performs no I/O, so it is
safe to use from many threads at once.
"""
