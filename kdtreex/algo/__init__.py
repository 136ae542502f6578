from .build import build_tree

__all__ = ["build_tree"]
