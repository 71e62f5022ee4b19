"""
leitner
-------

Leitner-system spaced repetition: bucket scheduling, answer-driven bucket
transitions and progress statistics, with a small JSON API around them.
"""

from leitner.consts import VERSION

__version__ = VERSION
