"""
Frame source adapters.

Only local image files are supported; live stream acquisition lives outside
this package.
"""

from .local import IMAGE_EXTENSIONS, iter_frames, scan_local_images

__all__ = [
    "IMAGE_EXTENSIONS",
    "iter_frames",
    "scan_local_images",
]
