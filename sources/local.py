"""
Local directory frame source.

Finds image files in a directory and yields them as frames, in file name
order, for replaying through the frame queue.
"""

import time
from pathlib import Path
from typing import Iterable, Iterator

from frames.queue import FrameMetadata

# Supported image extensions
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tiff", ".tif"}


def scan_local_images(path: str) -> list[Path]:
    """Find all image files in a directory or return a single image file.

    Args:
        path: Path to directory or single image file to scan.

    Returns:
        Sorted list of image file paths.

    Raises:
        ValueError: If path doesn't exist or isn't a valid image/directory.
    """
    file_path = Path(path).resolve()

    if file_path.is_file():
        if file_path.suffix.lower() in IMAGE_EXTENSIONS:
            return [file_path]
        raise ValueError(f"{path} is not a supported image file")

    if not file_path.is_dir():
        raise ValueError(f"{path} is not a valid file or directory")

    return sorted(
        p for p in file_path.iterdir()
        if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
    )


def iter_frames(paths: Iterable[Path]) -> Iterator[tuple[bytes, FrameMetadata]]:
    """Read image files as frames numbered from 1.

    The timestamp is the time the file was read.
    """
    for frame_number, path in enumerate(paths, start=1):
        data = path.read_bytes()
        yield data, FrameMetadata(timestamp=time.time(), frame_number=frame_number)
