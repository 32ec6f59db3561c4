"""FastAPI route modules."""

from hotelguide.api import health, hotels, reports

__all__ = ["health", "hotels", "reports"]
