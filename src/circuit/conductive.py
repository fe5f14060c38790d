# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Pixel classification for circuit extraction.

A pixel conducts when any of its colour channels is brighter than
``BRIGHTNESS_MIN``. The trailing channel is treated as alpha and never
takes part in the decision.
"""

from typing import Sequence

import numpy as np

#: Channel values strictly above this are considered bright.
BRIGHTNESS_MIN = 223


def is_conductive(pixel: Sequence[int]) -> bool:
    """Return True if any colour channel of ``pixel`` exceeds ``BRIGHTNESS_MIN``.

    Args:
        pixel: Channel values of one pixel, alpha last (length >= 2).

    Returns:
        Conductivity of the pixel.
    """
    return any(value > BRIGHTNESS_MIN for value in pixel[:-1])


def conductive_mask(pixels: np.ndarray) -> np.ndarray:
    """Vectorised ``is_conductive`` over a whole pixel buffer.

    Args:
        pixels: Array of shape (height, width, channels).

    Returns:
        Boolean array of shape (height, width).
    """
    return (pixels[..., :-1] > BRIGHTNESS_MIN).any(axis=-1)


def as_pixel_buffer(pixels) -> np.ndarray:
    """Validate a pixel buffer and return it as a contiguous uint8 array.

    Args:
        pixels: Array-like of shape (height, width, channels) with
            integer values in [0, 255] and at least two channels.

    Returns:
        C-contiguous ``uint8`` array.

    Raises:
        ValueError: If the buffer is not rectangular, has fewer than two
            channels, is empty, or holds values outside [0, 255].
    """
    try:
        arr = np.asarray(pixels)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"pixel buffer is not array-like: {exc}") from exc

    if arr.dtype == object:
        raise ValueError("pixel buffer must be rectangular")
    if arr.ndim != 3:
        raise ValueError(f"pixel buffer must have shape (height, width, channels), got {arr.shape}")
    h, w, c = arr.shape
    if h == 0 or w == 0:
        raise ValueError("pixel buffer must not be empty")
    if c < 2:
        raise ValueError(f"pixel buffer needs at least 2 channels, got {c}")

    if arr.dtype == np.uint8:
        return np.ascontiguousarray(arr)
    if arr.dtype.kind not in "iub":
        raise ValueError(f"pixel buffer must hold integers, got dtype {arr.dtype}")
    if arr.min() < 0 or arr.max() > 255:
        raise ValueError("pixel values must lie in [0, 255]")
    return np.ascontiguousarray(arr, dtype=np.uint8)


def pixel_buffer_from_bytes(width: int, height: int, channels: int,
                            data: bytes) -> np.ndarray:
    """Build a pixel buffer from raw, row-major channel bytes.

    Raises:
        ValueError: If ``data`` does not hold exactly
            ``width * height * channels`` bytes.
    """
    expected = width * height * channels
    if len(data) != expected:
        raise ValueError(f"expected {expected} bytes for {width}x{height}x{channels}, got {len(data)}")
    arr = np.frombuffer(data, dtype=np.uint8).reshape(height, width, channels)
    return as_pixel_buffer(arr.copy())
