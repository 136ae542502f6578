from .nearest import brute_force_nearest, nearest_neighbor, pruned_nearest

__all__ = [
    "brute_force_nearest",
    "nearest_neighbor",
    "pruned_nearest",
]
