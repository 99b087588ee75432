"""Proximity ranking and the search pipeline."""

from .orchestrator import search, selection_to_request
from .ranker import RoutingFn, rank, rank_driving, rank_straight_line

__all__ = [
    "RoutingFn",
    "rank",
    "rank_driving",
    "rank_straight_line",
    "search",
    "selection_to_request",
]
