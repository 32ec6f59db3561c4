"""hotelguide: hotel directory and asynchronous location report service."""

__version__ = "0.1.0"
