"""Provider record -> CanonicalOpportunity."""

from .normalizer import Normalizer

__all__ = ["Normalizer"]
