from .knn import knn
from .nearest import nearest_neighbor
from .range import range_query

__all__ = ["knn", "nearest_neighbor", "range_query"]
