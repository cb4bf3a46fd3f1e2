"""
Image normalization functions for preprocessing.

All functions are pure: they take an input and return a new output without
mutating the original array.
"""

import cv2
import numpy as np


def decode_frame(data: bytes) -> np.ndarray:
    """Decode an encoded frame (JPEG, PNG, ...) into a BGR image.

    Args:
        data: Encoded image bytes.

    Returns:
        Decoded image as a 3D uint8 numpy array (BGR).

    Raises:
        ValueError: If the data is empty or cannot be decoded.
    """
    if not data:
        raise ValueError("Frame buffer is empty")

    encoded = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(encoded, cv2.IMREAD_COLOR)
    if image is None:
        raise ValueError(f"Could not decode frame ({len(data)} bytes)")
    return image


def to_grayscale(img: np.ndarray) -> np.ndarray:
    """Convert an image to grayscale.

    Pure function: returns a new array without modifying the input.

    Args:
        img: Input image. Can be:
             - BGR (3 channels): Converted to grayscale
             - BGRA (4 channels): Alpha channel is dropped, then converted
             - Grayscale (1 channel or 2D): Returns a copy

    Returns:
        Grayscale image as 2D uint8 numpy array.

    Raises:
        ValueError: If input is not a valid image array.
        TypeError: If img is not a numpy array.
    """
    if not isinstance(img, np.ndarray):
        raise TypeError(f"Expected numpy.ndarray, got {type(img).__name__}")

    if img.ndim < 2 or img.ndim > 3:
        raise ValueError(
            f"Image must be 2D or 3D array, got {img.ndim}D array with shape {img.shape}"
        )

    if img.size == 0:
        raise ValueError("Image array is empty")

    if img.ndim == 2:
        result = img.copy()
    else:
        channels = img.shape[2]
        if channels == 1:
            result = img[:, :, 0].copy()
        elif channels == 3:
            result = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
        elif channels == 4:
            result = cv2.cvtColor(img, cv2.COLOR_BGRA2GRAY)
        else:
            raise ValueError(
                f"Unsupported number of channels: {channels}. "
                "Expected 1, 3 (BGR), or 4 (BGRA)."
            )

    if result.dtype != np.uint8:
        result = np.clip(result, 0, 255).astype(np.uint8)

    return result
