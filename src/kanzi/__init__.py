"""kanzi: Leitner-box kanji drills for elementary school students."""

from kanzi.consts import VERSION

__version__ = VERSION
