"""Planning: choosing the next facet to request."""

from facetgraph.planning.planner import NextQuestionPlanner

__all__ = ["NextQuestionPlanner"]
