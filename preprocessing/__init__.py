"""
Image preprocessing module for region detection.

Pure, deterministic OpenCV wrappers that turn an encoded frame into the
binary mask consumed by the region detector:

- normalization: decode_frame(), to_grayscale()
- binarize: binarize() (blur + threshold), mask_to_buffer()
"""

from .normalization import decode_frame, to_grayscale
from .binarize import binarize, mask_to_buffer

__all__ = [
    "decode_frame",
    "to_grayscale",
    "binarize",
    "mask_to_buffer",
]
