"""Code review guide and the integrity checks that keep it renderable."""

__version__ = "0.1.0"
