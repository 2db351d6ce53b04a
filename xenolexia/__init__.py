"""
Xenolexia - learn vocabulary while reading.

Replaces a controllable fraction of known words in prose with their
translations, and schedules reviews of the saved words with SM-2.
"""

__version__ = "0.1.0"
