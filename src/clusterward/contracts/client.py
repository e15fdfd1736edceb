"""Object client protocol - the boundary to the orchestration platform.

The real client is an external collaborator. The core only relies on the
methods below; clusterward.testing.FakeClient implements them in memory.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar

from clusterward.contracts.call import CallContext
from clusterward.contracts.objects import ObjectKey

T = TypeVar("T")


class ObjectClient(Protocol):
    """Fetch, list, and write platform objects.

    All methods may raise ClientError (transport/backend failure) or
    CallCancelledError (ambient call context done). Objects returned are
    private copies owned by the caller.
    """

    def get(self, call: CallContext, kind: type[T], key: ObjectKey) -> T:
        """Fetch one object.

        Raises:
            ObjectNotFoundError: If no object of this kind exists under key.
        """
        ...

    def list(self, call: CallContext, kind: type[T], namespace: str, labels: dict[str, str]) -> list[T]:
        """List objects in namespace whose labels include all given labels.

        Returns:
            Matching objects ordered by name.
        """
        ...

    def update(self, call: CallContext, obj: Any) -> None:
        """Write metadata/spec of an existing object (conditional on resource version).

        Raises:
            ConflictError: If obj.meta.resource_version is stale.
        """
        ...

    def update_status(self, call: CallContext, obj: Any) -> None:
        """Write only the status sub-object (conditional on resource version).

        On success obj.meta.resource_version is advanced to the stored value.

        Raises:
            ConflictError: If obj.meta.resource_version is stale.
        """
        ...

    def apply(self, call: CallContext, obj: Any) -> None:
        """Create or update an object by server-side merge (unconditional)."""
        ...

    def delete(self, call: CallContext, obj: Any) -> None:
        """Request deletion of an object."""
        ...
