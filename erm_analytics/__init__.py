"""Platform analytics engine for the ERM admin portal.

The ``erm_analytics`` package turns the append-only activity log into daily
snapshots, period aggregates, reconstructed sessions, timelines and
engagement scores.
"""

__version__ = "0.1.0"
