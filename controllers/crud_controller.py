import enum
import logging
import sqlite3
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from core.database import init_db, is_loaded
from core.validation import ValidationError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

# Asked before a delete; returns True when the user confirms
ConfirmCallback = Callable[[str], bool]


class ControllerState(enum.Enum):
    IDLE = "idle"
    EDITING_NEW = "editing_new"
    EDITING_EXISTING = "editing_existing"
    SAVING = "saving"
    ERROR = "error"


class CrudController(Generic[RecordT]):
    """
    Drives one CRUD page: validate -> write -> re-fetch -> close editor.

    The controller holds everything the page renders (records, form values,
    error messages, busy flags) and never raises to the UI: store failures
    end up in `page_error` or `modal_error` and the controller stays usable.

    Subclasses provide the entity specific parts (_fetch, _validate, _insert,
    _update, _delete and the form mapping).
    """
    entity_label = "records"
    form_fields: List[str] = []
    delete_prompt = "Are you sure you want to delete this record?"

    def __init__(self):
        self.records: List[RecordT] = []
        self.form: Dict[str, str] = self._blank_form()
        self.state = ControllerState.IDLE
        self.editing_id: Optional[int] = None
        self.modal_error = ""
        self.page_error: Optional[str] = None
        self.is_loading = False

    # --- DERIVED STATE ---

    @property
    def is_saving(self) -> bool:
        return self.state == ControllerState.SAVING

    @property
    def is_modal_open(self) -> bool:
        return self.state in (
            ControllerState.EDITING_NEW, ControllerState.EDITING_EXISTING, ControllerState.SAVING
        )

    @property
    def is_fatal(self) -> bool:
        """True when the store could not be initialised."""
        return self.state == ControllerState.ERROR

    @property
    def controls_enabled(self) -> bool:
        """Whether add/edit/delete/search controls should be clickable."""
        return not (self.is_loading or self.is_saving or self.is_fatal) and is_loaded()

    # --- LIFECYCLE ---

    def load(self) -> bool:
        """
        Makes sure the store is open, then fetches the list.
        A failure here is fatal for the page: the controller enters ERROR.
        """
        self.is_loading = True
        if not is_loaded():
            try:
                init_db()
            except (sqlite3.Error, RuntimeError, OSError) as e:
                logger.error(f"Database initialization failed: {e}")
                self.page_error = f"Failed to initialize database: {e}"
                self.state = ControllerState.ERROR
                self.is_loading = False
                return False
        return self.refresh()

    def refresh(self) -> bool:
        """Re-reads the full list from the store."""
        if self.is_fatal:
            return False
        self.is_loading = True
        self.page_error = None
        try:
            self.records = self._fetch()
            return True
        except (sqlite3.Error, RuntimeError) as e:
            logger.error(f"Error fetching {self.entity_label}: {e}")
            self.page_error = f"Failed to load {self.entity_label}: {e}"
            self.records = []
            return False
        finally:
            self.is_loading = False

    # --- EDITOR ---

    def open_for_add(self) -> None:
        if not self.controls_enabled:
            return
        self.form = self._blank_form()
        self.editing_id = None
        self.modal_error = ""
        self.state = ControllerState.EDITING_NEW

    def open_for_edit(self, record_id: int) -> bool:
        """Loads the selected record into the form. Returns False if it is not in the list."""
        if not self.controls_enabled:
            return False
        record = self.find(record_id)
        if record is None:
            self.page_error = f"Record {record_id} not found."
            return False
        self.form = self._form_from_record(record)
        self.editing_id = record_id
        self.modal_error = ""
        self.state = ControllerState.EDITING_EXISTING
        return True

    def set_field(self, name: str, value: Any) -> None:
        if name not in self.form:
            raise KeyError(name)
        if self.is_saving:
            return
        self.form[name] = "" if value is None else str(value)

    def close_editor(self) -> None:
        # Closing is blocked while a write is in flight
        if self.is_saving or not self.is_modal_open:
            return
        self.form = self._blank_form()
        self.editing_id = None
        self.modal_error = ""
        self.state = ControllerState.IDLE

    def save(self) -> bool:
        """
        Validates the form and writes it: one insert (new) or one update
        (existing). On success the list is re-read and the editor closes.
        """
        if not self.is_modal_open or self.is_saving:
            return False
        if self.is_fatal or not is_loaded():
            self.modal_error = "Cannot save: Database not available."
            return False

        self.modal_error = ""
        self.page_error = None
        editing_state = self.state

        try:
            payload = self._validate(self.form)
        except ValidationError as e:
            logger.debug(f"Validation failed for {self.entity_label}: {e}")
            self.modal_error = str(e)
            return False
        except (sqlite3.Error, RuntimeError) as e:
            logger.error(f"Error checking {self.entity_label}: {e}")
            self.modal_error = f"Save failed: {e}"
            return False

        self.state = ControllerState.SAVING
        try:
            if self.editing_id is not None:
                written = self._update(self.editing_id, payload)
            else:
                self._insert(payload)
                written = True
        except ValueError as e:
            # Conflicts already translated into a user-facing message
            self.modal_error = str(e)
            self.state = editing_state
            return False
        except (sqlite3.Error, RuntimeError) as e:
            logger.error(f"Error saving {self.entity_label}: {e}")
            self.modal_error = f"Save failed: {e}"
            self.state = editing_state
            return False

        if not written:
            self.modal_error = "This record no longer exists."
            self.state = editing_state
            self.refresh()
            return False

        self.refresh()
        self.form = self._blank_form()
        self.editing_id = None
        self.state = ControllerState.IDLE
        return True

    # --- DELETE ---

    def delete(self, record_id: int, confirm: ConfirmCallback) -> bool:
        """
        Deletes a record after the user confirms. Declining does nothing.
        """
        if not self.controls_enabled:
            if not is_loaded() and not self.is_fatal:
                self.page_error = "Cannot delete: Database not available."
            return False
        if not confirm(self.delete_prompt):
            return False

        self.page_error = None
        try:
            deleted = self._delete(record_id)
        except (sqlite3.Error, RuntimeError) as e:
            logger.error(f"Error deleting {self.entity_label}: {e}")
            self.page_error = f"Delete failed: {e}"
            return False

        self.refresh()
        if not deleted:
            self.page_error = "This record no longer exists."
            return False
        return True

    def dismiss_error(self) -> None:
        """Clears a page-level message. Initialisation failures stay."""
        if not self.is_fatal:
            self.page_error = None

    def find(self, record_id: int) -> Optional[RecordT]:
        for record in self.records:
            if getattr(record, "id", None) == record_id:
                return record
        return None

    # --- ENTITY HOOKS ---

    def _blank_form(self) -> Dict[str, str]:
        return {name: "" for name in self.form_fields}

    def _form_from_record(self, record: RecordT) -> Dict[str, str]:
        raise NotImplementedError

    def _fetch(self) -> List[RecordT]:
        raise NotImplementedError

    def _validate(self, form: Dict[str, str]) -> Any:
        raise NotImplementedError

    def _insert(self, payload: Any) -> int:
        raise NotImplementedError

    def _update(self, record_id: int, payload: Any) -> bool:
        raise NotImplementedError

    def _delete(self, record_id: int) -> bool:
        raise NotImplementedError
