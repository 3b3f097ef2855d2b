# Licensed under the Apache License, Version 2.0
"""ffsearch - find files by name, content, hex bytes and metadata."""

__version__ = "0.1.0"
