from responsive_images.parser.densities import parse_pixel_densities
from responsive_images.parser.sizes import parse_sizes

__all__ = ["parse_sizes", "parse_pixel_densities"]
