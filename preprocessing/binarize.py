"""
Binarization of grayscale frames into detection masks.

The region detector works on flat byte masks where 0 marks a candidate
(foreground) pixel. These helpers produce such masks with OpenCV.
"""

import cv2
import numpy as np


def binarize(gray: np.ndarray, blur_sigma: float, threshold: int) -> np.ndarray:
    """Blur and threshold a grayscale image.

    Pixels whose blurred value is >= threshold become 255 (background);
    the rest become 0 (foreground).

    Args:
        gray: 2D uint8 grayscale image.
        blur_sigma: Gaussian sigma; 0 disables blurring.
        threshold: Gray level in [0, 255].

    Returns:
        New 2D uint8 array containing only 0 and 255.

    Raises:
        ValueError: If gray is not a 2D array.
    """
    if gray.ndim != 2:
        raise ValueError(f"Expected 2D grayscale image, got shape {gray.shape}")

    blurred = cv2.GaussianBlur(gray, (0, 0), blur_sigma) if blur_sigma > 0 else gray
    # THRESH_BINARY keeps values strictly above thresh
    _, mask = cv2.threshold(blurred, threshold - 1, 255, cv2.THRESH_BINARY)
    return mask


def mask_to_buffer(mask: np.ndarray) -> tuple[bytes, int, int]:
    """Flatten a 2D mask into a row-major byte buffer.

    Returns:
        Tuple of (buffer, width, height).

    Raises:
        ValueError: If mask is not a 2D uint8 array.
    """
    if mask.ndim != 2:
        raise ValueError(f"Expected 2D mask, got shape {mask.shape}")
    if mask.dtype != np.uint8:
        raise ValueError(f"Expected uint8 mask, got {mask.dtype}")

    height, width = mask.shape
    return np.ascontiguousarray(mask).tobytes(), width, height
