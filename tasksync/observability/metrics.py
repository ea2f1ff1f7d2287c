"""Prometheus metrics for TaskSync.

Tracks todo mutations and the health of the live-update fan-out.
"""

from prometheus_client import Counter, Gauge

# Mutation metrics
TODO_MUTATIONS = Counter(
    "tasksync_todo_mutations_total",
    "Total number of todo mutations attempted",
    labelnames=["operation", "outcome"],
)

# Fan-out metrics
BROADCASTS = Counter(
    "tasksync_broadcasts_total",
    "Total number of snapshots broadcast to connected sessions",
)

SNAPSHOTS_DROPPED = Counter(
    "tasksync_snapshots_dropped_total",
    "Pending snapshots discarded because a newer one superseded them",
)

CONNECTED_SESSIONS = Gauge(
    "tasksync_connected_sessions",
    "Number of sessions connected to the push channel",
)
