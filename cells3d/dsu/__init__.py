"""Disjoint-set forests: generic dict-backed and dense array-backed."""
from cells3d.dsu.results import Found, NotFound, NOT_FOUND, FindResult
from cells3d.dsu.link_policy import LinkPolicy, RandomLinkPolicy, FixedLinkPolicy
from cells3d.dsu.disjoint_set import DisjointSet
from cells3d.dsu.array_forest import ArrayDisjointSet

__all__ = [
    "Found", "NotFound", "NOT_FOUND", "FindResult",
    "LinkPolicy", "RandomLinkPolicy", "FixedLinkPolicy",
    "DisjointSet", "ArrayDisjointSet",
]
