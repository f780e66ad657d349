"""Factory helpers for runtime entities."""

from .content_factory import ContentFactory, DefaultContentFactory
from .id_factory import make_instance_id

__all__ = [
    "ContentFactory",
    "DefaultContentFactory",
    "make_instance_id",
]
