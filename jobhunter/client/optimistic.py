import copy
import logging
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreSyncError(RuntimeError):
    """A remote write failed and the local state was rolled back."""


def optimistic_update(
    state: dict[str, Any],
    apply: Callable[[dict[str, Any]], None],
    remote: Callable[[], T],
) -> T:
    """
    Apply a local change immediately, then confirm it remotely.

    `state` is snapshotted before `apply` mutates it in place. If `remote`
    raises, the snapshot is restored and StoreSyncError is raised with the
    original error as its cause.
    """
    snapshot = copy.deepcopy(state)
    apply(state)
    try:
        return remote()
    except Exception as e:
        state.clear()
        state.update(snapshot)
        logger.warning("Remote write failed, local state restored: %s", e)
        raise StoreSyncError(str(e)) from e
