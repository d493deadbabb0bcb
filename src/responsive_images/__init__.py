"""Plan the renditions of a responsive <picture> element."""

__version__ = "0.1.0"
