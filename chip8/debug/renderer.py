"""Display rendering utilities for the CHIP-8 interpreter."""

from typing import Tuple
import numpy as np
from PIL import Image


class DisplayRenderer:
    """Renders the 64x32 display buffer to text or images."""

    def __init__(self, scale: int = 8,
                 bg_color: Tuple[int, int, int] = (0, 0, 0),
                 fg_color: Tuple[int, int, int] = (255, 255, 255),
                 on_char: str = "O", off_char: str = "."):
        self.scale = scale
        self.bg_color = bg_color
        self.fg_color = fg_color
        self.on_char = on_char
        self.off_char = off_char

    def render_text(self, buffer: np.ndarray) -> str:
        """Render one character per pixel, one line per row."""
        return "\n".join(
            "".join(self.on_char if cell else self.off_char for cell in row)
            for row in buffer
        )

    def render_display(self, buffer: np.ndarray) -> Image.Image:
        """Render the display buffer to a scaled RGB PIL Image."""
        height, width = buffer.shape
        rgb = np.empty((height, width, 3), dtype=np.uint8)
        rgb[:] = self.bg_color
        rgb[buffer.astype(bool)] = self.fg_color

        img = Image.fromarray(rgb)
        if self.scale != 1:
            img = img.resize((width * self.scale, height * self.scale), Image.Resampling.NEAREST)
        return img

    def save_display(self, buffer: np.ndarray, filename: str) -> None:
        """Save display to image file."""
        self.render_display(buffer).save(filename)
