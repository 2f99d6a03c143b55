"""Input tensor preprocessing for image classification.

Resize to the model's spatial size, apply ImageNet per-channel
normalization, and convert interleaved RGB samples into a planar
NCHW float32 tensor.
"""

from classification_pipeline.transforms.normalization import (
    ImageTensorEncoder,
    encode_image,
    interleaved_to_planar,
    normalize,
    resize_exact,
    to_pixel_grid,
)

__all__ = [
    "ImageTensorEncoder",
    "encode_image",
    "interleaved_to_planar",
    "normalize",
    "resize_exact",
    "to_pixel_grid",
]
