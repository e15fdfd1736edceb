"""
Clusterward: reconciliation task engine for distributed database clusters.

Each component controller (placement coordinator, storage node, ...) is an
ordered pipeline of small tasks sharing one per-pass context. The pipeline
moves observed state toward desired state and finishes by deriving and
persisting the instance's status.
"""

__version__ = "0.1.0"
