"""IdMap: an ordered container that hands out never-reused integer keys."""

from importlib.metadata import version as _version

__version__ = _version("idmap")

from idmap.core import IdMap, MISSING, set_strict_updates, strict_updates_enabled
from idmap.combinators import union, intersect, diff, merge
from idmap.codec import DecodeError, encode, decode, dumps, loads

__all__ = [
    "IdMap",
    "MISSING",
    "set_strict_updates",
    "strict_updates_enabled",
    "union",
    "intersect",
    "diff",
    "merge",
    "DecodeError",
    "encode",
    "decode",
    "dumps",
    "loads",
]
