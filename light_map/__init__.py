"""light-map - ordered key/value container with functional transforms"""

from ._version import version as __version__
from .normalize import is_pair, is_pair_sequence, to_plain
from .ordered_map import LightMap


__all__ = [
    "LightMap",
    "__version__",
    "is_pair",
    "is_pair_sequence",
    "to_plain",
]
