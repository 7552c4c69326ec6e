"""
Configuration Screen

One screen per configuration entity: load the rows, show them in a CRUD
table, edit one record at a time in a modal form and report every outcome
through the injected notifier.

Key Features:
- Load state (idle, loading, loaded) independent of the modal state
- Create, edit and duplicate through a single form dictionary
- Required-field validation and the identity guard run before any query
- Delete behind a confirmation step
- Every backend failure is logged and notified, never re-raised
"""

import enum
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.auth import IdentityProvider
from ..core.notifications import Notifier, error, success
from .crud_service import ConfigEntityService, error_message
from .crud_table import CRUDTable, TableAction
from .entity_registry import EntityDescriptor

logger = logging.getLogger(__name__)


class ScreenPhase(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"


class ModalMode(str, enum.Enum):
    CREATE = "create"
    EDIT = "edit"


class ConfigurationScreen:
    """
    Screen controller for a single configuration entity.

    The screen holds a snapshot of the rows from the last fetch; rows only
    change through ``fetch``, which runs after every successful mutation.
    """

    def __init__(
        self,
        descriptor: EntityDescriptor,
        db: Session,
        notifier: Notifier,
        identity: IdentityProvider
    ):
        self.descriptor = descriptor
        self.service = ConfigEntityService(descriptor, db)
        self.notifier = notifier
        self.identity = identity

        self.phase = ScreenPhase.IDLE
        self.rows: List[Dict[str, Any]] = []
        self.modal_mode: Optional[ModalMode] = None
        self.editing_id: Optional[Any] = None
        self.form: Dict[str, Any] = descriptor.form_defaults()
        self.pending_delete: Optional[Dict[str, Any]] = None
        self.saving = False

    @property
    def loading(self) -> bool:
        return self.phase == ScreenPhase.LOADING

    @property
    def modal_open(self) -> bool:
        return self.modal_mode is not None

    @property
    def delete_dialog_open(self) -> bool:
        return self.pending_delete is not None

    # Loading

    def mount(self) -> None:
        self.phase = ScreenPhase.LOADING
        self.fetch()

    def fetch(self) -> None:
        """Reload every row; on failure the table is emptied."""
        self.phase = ScreenPhase.LOADING
        try:
            self.rows = self.service.list_rows()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching {self.descriptor.key} records: {str(e)}")
            self.notifier.notify(error(f"Failed to fetch {self.descriptor.plural_label.lower()}"))
            self.rows = []
        finally:
            self.phase = ScreenPhase.LOADED

    # Modal form

    def open_create(self) -> None:
        self.form = self.descriptor.form_defaults()
        self.editing_id = None
        self.modal_mode = ModalMode.CREATE

    def open_edit(self, row: Dict[str, Any]) -> None:
        self.form = dict(row)
        self.editing_id = row.get("id")
        self.modal_mode = ModalMode.EDIT

    def open_duplicate(self, row: Dict[str, Any]) -> None:
        self.form = self.service.duplicate_payload(row)
        self.editing_id = None
        self.modal_mode = ModalMode.CREATE

    def set_field(self, name: str, value: Any) -> None:
        self.form[name] = value

    def close_modal(self) -> None:
        self.modal_mode = None
        self.editing_id = None
        self.form = self.descriptor.form_defaults()

    def save(self) -> bool:
        """
        Submit the modal form.

        Returns:
            bool: True when the record was written and the modal closed
        """
        if not self.modal_open:
            return False

        creating = self.modal_mode == ModalMode.CREATE
        label = self.descriptor.label

        try:
            if creating:
                payload = self.service.build_create_payload(self.form)
            else:
                payload = self.service.build_update_payload(self.form)
        except ValueError as e:
            self.notifier.notify(error(error_message(e)))
            return False

        user = self.identity.get_user()
        if user is None:
            self.notifier.notify(error("Not authenticated"))
            return False

        self.saving = True
        try:
            if creating:
                self.service.create_record(payload, user)
            else:
                self.service.update_record(self.editing_id, payload, user)
        except SQLAlchemyError as e:
            logger.error(f"Error saving {self.descriptor.key}: {str(e)}")
            self.notifier.notify(error(f"Failed to save {label.lower()}"))
            return False
        except ValueError as e:
            # the row vanished between fetch and save
            logger.warning(f"Error saving {self.descriptor.key}: {str(e)}")
            self.notifier.notify(error(error_message(e)))
            return False
        finally:
            self.saving = False

        verb = "created" if creating else "updated"
        self.notifier.notify(success(f"{label} {verb} successfully"))
        self.close_modal()
        self.fetch()
        return True

    # Delete confirmation

    def request_delete(self, row: Dict[str, Any]) -> None:
        self.pending_delete = row

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        """Delete the pending row; the dialog closes whatever the outcome."""
        row, self.pending_delete = self.pending_delete, None
        if row is None:
            return False

        label = self.descriptor.label
        try:
            self.service.delete_record(row.get("id"), self.identity.get_user())
        except PermissionError as e:
            self.notifier.notify(error(str(e)))
            return False
        except (SQLAlchemyError, ValueError) as e:
            logger.error(f"Error deleting {self.descriptor.key} {row.get('id')}: {str(e)}")
            self.notifier.notify(error(f"Failed to delete {label.lower()}"))
            return False

        self.notifier.notify(success(f"{label} deleted successfully"))
        self.fetch()
        return True

    def toggle_active(self, row: Dict[str, Any]) -> bool:
        label = self.descriptor.label
        try:
            record = self.service.toggle_active(row.get("id"), self.identity.get_user())
        except PermissionError as e:
            self.notifier.notify(error(str(e)))
            return False
        except (SQLAlchemyError, ValueError) as e:
            logger.error(f"Error toggling {self.descriptor.key} {row.get('id')}: {str(e)}")
            self.notifier.notify(error(f"Failed to update {label.lower()}"))
            return False

        state = "activated" if record.is_active else "deactivated"
        self.notifier.notify(success(f"{label} {state} successfully"))
        self.fetch()
        return True

    # Table

    def table(self) -> CRUDTable:
        """A table bound to the current rows and this screen's callbacks."""
        return CRUDTable(
            self.rows,
            self.descriptor.columns,
            actions=[TableAction("toggle_active", "Toggle Active", self.toggle_active)],
            on_add=self.open_create,
            on_edit=self.open_edit,
            on_delete=self.request_delete,
            on_duplicate=self.open_duplicate,
            loading=self.loading,
            title=self.descriptor.table_title,
            description=self.descriptor.table_description,
            search_placeholder=self.descriptor.search_placeholder,
            empty_message=self.descriptor.empty_message,
        )
