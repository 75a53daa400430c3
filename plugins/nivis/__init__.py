"""
nivis - interactive viewer for a phase-field snowflake simulation.

Run with ``python -m nivis``; see ``nivis.__main__`` for options.
"""

__version__ = "0.1.0"
