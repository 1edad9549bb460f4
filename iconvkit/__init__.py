"""Character set conversion with iconv-style encoding names and options.

Modules: aliases (names and code pages), charsets (per-character
encoders and decoders), converter (streaming conversion), langinfo
(locale code set) and cli (the ``iconvkit`` command).
"""

__version__ = "0.1.0"