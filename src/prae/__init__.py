"""PRAE: pack, unpack and list Pyongyang Racer asset archives.

An archive is a raw-DEFLATE compressed buffer holding an entry count, one
metadata record (path and asset type) per file, then one length-prefixed
payload per file in the same order. Textures are always stored first.

Programmatic entry points live in :mod:`prae.api`; the command line tool is
:mod:`prae.cli`.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
