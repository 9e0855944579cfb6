"""
Color utilities - packed pixel channel conversions

The emulator hands out pixels packed as 0xBBGGRR; the canvas wants 0xRRGGBB.
"""


def bgr_to_rgb(pixel: int) -> int:
    """
    Swap the first and third channel of a packed pixel.

    The operation is its own inverse, so it also converts RGB back to BGR.

    Args:
        pixel: Packed 24-bit pixel in source order (0xBBGGRR)

    Returns:
        Packed 24-bit pixel in destination order (0xRRGGBB)
    """
    r = pixel & 0xFF
    g = (pixel >> 8) & 0xFF
    b = (pixel >> 16) & 0xFF
    return (r << 16) | (g << 8) | b

