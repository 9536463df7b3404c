"""
MySQL dump to SQLite script conversion.

The conversion is plain text rewriting: each rule is a pure function from
text to text, and ``PIPELINE`` applies them in a fixed order. None of the
rules understands SQL, so a dump using constructs the rules do not cover
will still fail when SQLite runs it.
"""

import re
from typing import Callable, Tuple

Rule = Callable[[str], str]

# Word boundaries follow ASCII word characters only.
_FLAGS = re.IGNORECASE | re.ASCII

_VERSION_COMMENT = re.compile(r"/\*!.*?\*/", re.DOTALL)
_LOCK_TABLES = re.compile(r"^LOCK TABLES.*;", re.MULTILINE | _FLAGS)
_UNLOCK_TABLES = re.compile(r"^UNLOCK TABLES;", re.MULTILINE | _FLAGS)
_ENGINE_OPTIONS = re.compile(r"ENGINE=[^;]*;", _FLAGS)
_AUTO_INCREMENT = re.compile(r"\bAUTO_INCREMENT\b", _FLAGS)
_ON_UPDATE = re.compile(r"ON UPDATE CURRENT_TIMESTAMP", _FLAGS)
_INT = re.compile(r"\bint\b", _FLAGS)
_UNSIGNED = re.compile(r"\bunsigned\b", _FLAGS)
_UNIQUE_KEY = re.compile(r"UNIQUE KEY\s+[`\"']?\w+[`\"']?\s*\(", _FLAGS)
_REPEATED_SEMICOLONS = re.compile(r";(\s*;)+")
_LEADING_SEMICOLONS = re.compile(r"^\s*;+")


def strip_version_comments(text: str) -> str:
    """Remove ``/*! ... */`` version-guarded comments, even across lines."""
    return _VERSION_COMMENT.sub("", text)


def strip_table_locks(text: str) -> str:
    """Remove ``LOCK TABLES ...;`` and ``UNLOCK TABLES;`` lines."""
    text = _LOCK_TABLES.sub("", text)
    return _UNLOCK_TABLES.sub("", text)


def strip_engine_options(text: str) -> str:
    """Drop ``ENGINE=...`` and every table option after it up to the ``;``."""
    return _ENGINE_OPTIONS.sub(";", text)


def strip_auto_increment(text: str) -> str:
    return _AUTO_INCREMENT.sub("", text)


def strip_on_update(text: str) -> str:
    return _ON_UPDATE.sub("", text)


def widen_int(text: str) -> str:
    """``int`` becomes ``INTEGER`` so ``int PRIMARY KEY`` aliases the rowid."""
    return _INT.sub("INTEGER", text)


def strip_unsigned(text: str) -> str:
    return _UNSIGNED.sub("", text)


def rewrite_unique_keys(text: str) -> str:
    """``UNIQUE KEY name (`` becomes a bare ``UNIQUE (`` table constraint."""
    return _UNIQUE_KEY.sub("UNIQUE (", text)


def unescape_quotes(text: str) -> str:
    r"""``\'`` becomes ``''`` and ``\"`` becomes ``"``."""
    text = text.replace("\\'", "''")
    return text.replace('\\"', '"')


def collapse_semicolons(text: str) -> str:
    """Merge empty statements left behind by the other rules."""
    text = _REPEATED_SEMICOLONS.sub(";", text)
    return _LEADING_SEMICOLONS.sub("", text)


PIPELINE: Tuple[Rule, ...] = (
    strip_version_comments,
    strip_table_locks,
    strip_engine_options,
    strip_auto_increment,
    strip_on_update,
    widen_int,
    strip_unsigned,
    rewrite_unique_keys,
    unescape_quotes,
    collapse_semicolons,
)


class DialectConverter:
    """Applies an ordered sequence of rewrite rules to a dump."""

    def __init__(self, rules: Tuple[Rule, ...] = PIPELINE):
        self.rules = rules

    def convert(self, text: str) -> str:
        for rule in self.rules:
            text = rule(text)
        return text
