"""mdtangle core Python library package.

Exposes the tangle engine and the exceptions it raises.
"""

from . import exceptions  # noqa: F401
from .tangle import CodeFile, CodeSection, CodeStore

__all__ = ["CodeFile", "CodeSection", "CodeStore", "exceptions"]
