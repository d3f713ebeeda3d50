"""
Color conversion and blending.

HSB values use a 0-255 range on every channel, so a hue of 255 wraps
back to 0 (red). RGB arrays are uint8 in [0, 255].
"""

import numpy as np


def hsb255_to_rgb(
    hue: np.ndarray,
    saturation: np.ndarray,
    brightness: np.ndarray,
) -> np.ndarray:
    """
    Convert 0-255 HSB channels to uint8 RGB.

    Inputs are clamped to [0, 255] before conversion; output channels
    are truncated toward zero, as Processing does for HSB colors.

    Args:
        hue, saturation, brightness: Arrays of the same shape.

    Returns:
        Array of shape ``hue.shape + (3,)``, dtype uint8.
    """
    h = np.clip(np.asarray(hue, dtype=np.float64), 0.0, 255.0) / 255.0
    s = np.clip(np.asarray(saturation, dtype=np.float64), 0.0, 255.0) / 255.0
    v = np.clip(np.asarray(brightness, dtype=np.float64), 0.0, 255.0) / 255.0

    rgb = _hsv_to_rgb_array(h, s, v)
    return _to_byte(rgb)


def _to_byte(unit: np.ndarray) -> np.ndarray:
    # Truncate; the epsilon absorbs x / 255 * 255 landing just under x
    return np.floor(unit * 255.0 + 1e-9).astype(np.uint8)


def _hsv_to_rgb_array(
    h: np.ndarray,
    s: np.ndarray,
    v: np.ndarray,
) -> np.ndarray:
    """
    Vectorized HSV to RGB conversion.

    Args:
        h, s, v: Arrays of same shape, values in [0, 1].

    Returns:
        float64 array with a trailing RGB axis, values in [0, 1].
    """
    h6 = (h * 6.0) % 6.0
    i = h6.astype(np.int32)
    f = h6 - i

    p = v * (1.0 - s)
    q = v * (1.0 - s * f)
    t = v * (1.0 - s * (1.0 - f))

    rgb = np.zeros(h.shape + (3,), dtype=np.float64)
    for sector, r_src, g_src, b_src in [
        (0, v, t, p),
        (1, q, v, p),
        (2, p, v, t),
        (3, p, q, v),
        (4, t, p, v),
        (5, v, p, q),
    ]:
        m = i == sector
        if np.any(m):
            rgb[m, 0] = r_src[m]
            rgb[m, 1] = g_src[m]
            rgb[m, 2] = b_src[m]
    return rgb


def soft_light(base: np.ndarray, blend: np.ndarray) -> np.ndarray:
    """
    Per-channel soft-light blend of two uint8 color arrays.

    Uses ``base² (1 - 2 blend) + 2 base blend`` on [0, 1] channels,
    truncating back to 0-255.
    A black blend layer squares the base; a white one yields
    ``2 base - base²``; 0 and 255 are fixed points of ``soft_light(x, x)``.

    Args:
        base: Base layer, uint8, any shape.
        blend: Blend layer, same shape as ``base``.

    Returns:
        uint8 array of the same shape.
    """
    b = np.asarray(base, dtype=np.float64) / 255.0
    s = np.asarray(blend, dtype=np.float64) / 255.0
    out = b * b * (1.0 - 2.0 * s) + 2.0 * b * s
    return _to_byte(np.clip(out, 0.0, 1.0))
