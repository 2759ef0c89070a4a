"""Status/progress coupling for learning goals.

Every write path (create, update, progress patch) runs the new values through
``reconcile`` so the rules hold no matter which endpoint changed the goal:

* a status that becomes ``completed`` pulls progress up to 100;
* otherwise a changed progress drives the status: 0 means ``not-started``,
  100 means ``completed``, anything in between moves a ``not-started`` or
  ``completed`` goal to ``in-progress``. Paused goals stay paused.
"""
from skillforge.models import COMPLETED, IN_PROGRESS, NOT_STARTED


def reconcile(status, progress, previous_status=None, previous_progress=None):
    """Return the ``(status, progress)`` pair to persist.

    ``previous_status``/``previous_progress`` are the stored values, or None
    for a goal that is being created.
    """
    if status == COMPLETED and previous_status != COMPLETED:
        return COMPLETED, 100

    if progress != previous_progress:
        if progress == 0:
            return NOT_STARTED, 0
        if progress == 100:
            return COMPLETED, 100
        if status in (NOT_STARTED, COMPLETED):
            return IN_PROGRESS, progress

    return status, progress
