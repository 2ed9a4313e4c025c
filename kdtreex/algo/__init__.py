from .build import build_tree
from .validate import validate_tree

__all__ = ["build_tree", "validate_tree"]
