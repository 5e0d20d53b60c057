"""Modal dialogs for the follow-lists TUI.

Import modals from this package: ``from follow_lists.modals import BulkAddModal``
"""

from follow_lists.modals.editing import (
    BulkAddModal,
    ImportPathModal,
)

__all__ = [
    "BulkAddModal",
    "ImportPathModal",
]
