"""
Skin Compositing Engine.

This package is the core image logic of the overlay service:
decoding the base and overlay PNGs, compositing them, keying out
the reserved transparency color and deriving cache keys.

This package has no networking dependencies. It's pure image processing.

"""

from .cache_key import derive_cache_key
from .composite import CHROMA_KEY, apply_chroma_key, composite_skin, encode_png
from .decode import DATA_URI_PREFIX, decode_overlay, decode_png, strip_data_uri
from .errors import CompositorError, DecodeError, EncodeError, EncodingError

__all__ = [
    "CHROMA_KEY",
    "DATA_URI_PREFIX",
    "CompositorError",
    "DecodeError",
    "EncodeError",
    "EncodingError",
    "apply_chroma_key",
    "composite_skin",
    "decode_overlay",
    "decode_png",
    "derive_cache_key",
    "encode_png",
    "strip_data_uri",
]
