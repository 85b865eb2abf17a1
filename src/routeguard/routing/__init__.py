"""Routing — the route-conflict detection engine.

Segment grammar, canonical path forms, pairwise conflict rules, router
prefix resolution and the run-scoped route ledger.
"""
