"""Flight carbon footprint estimates via the Carbon Interface API."""

__version__ = "1.0.0"
