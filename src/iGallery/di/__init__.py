from .bootstrap import bootstrap
from .container import Container
from .lifetime import Lifetime

__all__ = ["Container", "Lifetime", "bootstrap"]
