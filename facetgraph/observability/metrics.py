"""Prometheus metrics for facetgraph.

Provides counters for turn outcomes, rejected candidates and phase
progress, plus the turn latency histogram recorded by the service.
"""

from prometheus_client import Counter, Histogram

# Turn metrics
TURNS_PROCESSED = Counter(
    "facetgraph_turns_processed_total",
    "Total number of intake turns processed",
    labelnames=["phase", "outcome"],  # outcome: applied, duplicate
)

TURN_LATENCY = Histogram(
    "facetgraph_turn_latency_seconds",
    "Turn handling latency in seconds, lock wait included",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

# Validation metrics
FACET_REJECTIONS = Counter(
    "facetgraph_facet_rejections_total",
    "Candidate updates and mission choices rejected",
    labelnames=["code"],
)

# Phase metrics
PHASE_TRANSITIONS = Counter(
    "facetgraph_phase_transitions_total",
    "Phase transitions taken",
    labelnames=["from_phase", "to_phase"],
)

MISSION_OVERRIDES = Counter(
    "facetgraph_mission_overrides_total",
    "Explicit mission overrides applied",
    labelnames=["new_mission"],
)

# Concurrency metrics
SUBJECT_LOCK_TIMEOUTS = Counter(
    "facetgraph_subject_lock_timeouts_total",
    "Turns rejected because the subject lock was held too long",
)
