"""Image operations for ImagePro."""

from .compress import compress_image
from .enhance import SizeTargetingEnhancer, enhance_image
from .noise import add_noise_padding, perturb_pixels
from .resize import resize_image, scale_to_height, scale_to_width

__all__ = [
    "SizeTargetingEnhancer",
    "add_noise_padding",
    "compress_image",
    "enhance_image",
    "perturb_pixels",
    "resize_image",
    "scale_to_height",
    "scale_to_width",
]
