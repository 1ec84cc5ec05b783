from .key_values import KeyValueRepository
from . import models

__all__ = ["KeyValueRepository", "models"]
