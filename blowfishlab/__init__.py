"""blowfishlab: the Blowfish block cipher primitive with roundtrip and benchmark harnesses."""

from .cipher import Blowfish, BlowfishError, KeysizeError, new

__version__ = "0.1.0"

__all__ = ["Blowfish", "BlowfishError", "KeysizeError", "new", "__version__"]
