"""Component controllers built on the task engine.

Submodules:
- common: shared state, context tasks, predicates, status helpers
- pd: placement-coordinator controller
- tikv: storage-node controller
- reconciler: work-queue entry point
"""

from clusterward.controllers.reconciler import Reconciler

__all__ = ["Reconciler"]
