"""
Ellis Hope Review - Application review and voting workflow.

Takes a submitted assistance application through the board review
process: guarded status transitions, quorum-based collective voting
with a veto rule, threaded discussion, derived statistics and
notification triggering.

Layers:
- domain: models, transition table, voting tally, errors (no I/O)
- application: ports and the review services
- infrastructure: in-memory stubs, PostgreSQL/SMTP adapters, observability
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
