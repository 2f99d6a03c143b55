"""Type aliases for classification_pipeline inter-module contracts."""

import numpy as np
import numpy.typing as npt

# (H, W, 3) uint8, R,G,B interleaved per pixel, row-major.
PixelGrid = npt.NDArray[np.uint8]
