"""
Fretboard harmony engine.

Generates Roman-numeral chord progressions from per-genre style packs and
picks playable guitar voicings that keep the fretting hand close to where it
already is.
"""

__version__ = "0.1.0"
