# SafePass - Vault Service
#
# Orchestrates the key store, the encryption service and the record store
# behind the interactive operations: show, search, create, delete.
#
# Every operation reports how it ended through the renderer and returns an
# Outcome. Domain failures (no key, wrong key, bad input, nothing found)
# are handled here; storage, key-file and clipboard failures propagate to
# the command loop.

import logging
from enum import Enum
from typing import List, Optional, Sequence

from ..core import EventSeverity, EventType, get_event_logger
from .encryption import EncryptionService
from .exceptions import DecryptError, EmptyResult, KeyAbsent, MalformedKey, ValidationError
from .key_store import KeyStore
from .models import Identity, Record, sort_records, validate_field
from .record_store import RecordStore

logger = logging.getLogger(__name__)

LOCKED_ICON = "🔐"
UNLOCKED_ICON = "🔓"
CLIPBOARD_PLACEHOLDER = "empty"


class Outcome(str, Enum):
    """How a vault operation ended."""

    REVEALED = "revealed"
    CREATED = "created"
    DELETED = "deleted"
    EMPTY_VAULT = "empty_vault"
    NOT_FOUND = "not_found"
    KEY_ABSENT = "key_absent"
    INVALID_KEY = "invalid_key"
    INVALID_INPUT = "invalid_input"
    CANCELLED = "cancelled"
    NOTHING_SELECTED = "nothing_selected"


class VaultService:
    """
    Interactive vault operations over encrypted service records.

    Security:
    - The key is loaded per operation and wiped when the operation ends
    - Plaintext passwords go to the clipboard and are not kept
    - Tokens and key material never reach the renderer or the event log

    Args:
        records: Record store for the services table
        keys: Key store for the security key file
        prompter: confirm / text / secret / select / multi_select
        renderer: display(severity, message)
        clipboard: copy(text)
    """

    def __init__(
        self,
        records: RecordStore,
        keys: KeyStore,
        prompter,
        renderer,
        clipboard,
        event_logger=None,
    ):
        self.records = records
        self.keys = keys
        self.prompter = prompter
        self.renderer = renderer
        self.clipboard = clipboard
        self.events = event_logger or get_event_logger()

    # ── Helpers ─────────────────────────────────────────────────────

    def _report(self, severity: str, message: str) -> None:
        self.renderer.display(severity, message)

    def _ensure_not_empty(self) -> None:
        if self.records.count() == 0:
            raise EmptyResult("Database is empty")

    def _fetch(self, term: Optional[str]) -> List[Record]:
        if term:
            found = self.records.search(term)
            if not found:
                raise EmptyResult(f"No services found matching {term!r}")
            return found
        found = self.records.all()
        if not found:
            raise EmptyResult("Database is empty")
        return found

    def _require_key(self) -> None:
        if not self.keys.exists():
            raise KeyAbsent("Security key is required to proceed")

    @staticmethod
    def _resolve(identity: Identity, fetched: Sequence[Record]) -> Record:
        """Find the fetched record with exactly this identity."""
        for record in sort_records(fetched):
            if record.identity == identity:
                return record
        raise EmptyResult(f"Service {identity.label!r} is no longer available")

    # ── Key ─────────────────────────────────────────────────────────

    def offer_key_creation(self) -> bool:
        """Ask to create the security key if it is missing.

        Returns:
            True if a key exists after the call.
        """
        if self.keys.exists():
            return True

        question = (
            f"{self.keys.key_path} was not found. Do you wish to create it? "
            "This file is a key to protect the passwords"
        )
        if not self.prompter.confirm(question):
            return False

        self.keys.create().wipe()
        self._report("info", f"{self.keys.key_path} was created")
        self.events.log_event(
            event_type=EventType.KEY_CREATED,
            severity=EventSeverity.INFO,
            message="Security key created",
            details={"key_path": str(self.keys.key_path)},
        )
        return True

    # ── Show / search ───────────────────────────────────────────────

    def reveal(self, term: Optional[str] = None) -> Outcome:
        """List services (optionally filtered by name) and copy one password.

        Listing works without a key; only the final decrypt needs it.
        """
        try:
            self._ensure_not_empty()
        except EmptyResult as e:
            self._report("error", str(e))
            return Outcome.EMPTY_VAULT

        self.offer_key_creation()

        try:
            fetched = self._fetch(term)
        except EmptyResult as e:
            self._report("error", str(e))
            return Outcome.NOT_FOUND

        ordered = sort_records(fetched)
        icon = UNLOCKED_ICON if self.keys.exists() else LOCKED_ICON
        labels = [f"{record.label} {icon}" for record in ordered]

        index = self.prompter.select(labels, "Available services")
        record = self._resolve(ordered[index].identity, fetched)

        with self.keys.borrow() as key:
            try:
                if key is None:
                    raise KeyAbsent("Cannot save password to clipboard without the security key")
                password = EncryptionService.decrypt_text(record.password, key)
            except KeyAbsent as e:
                self._report("error", str(e))
                return Outcome.KEY_ABSENT
            except DecryptError:
                self._report("error", "Invalid security key")
                self.events.log_event(
                    event_type=EventType.SERVICE_REVEAL_FAILED,
                    severity=EventSeverity.WARNING,
                    message="Password could not be decrypted",
                    details={"name": record.name, "username": record.username},
                )
                return Outcome.INVALID_KEY

        self.clipboard.copy(password)
        del password

        self._report(
            "ok",
            f"Password for {record.name!r} ({record.username}) has been saved to your "
            "clipboard. You can use it as long as the program is running",
        )
        self.events.log_event(
            event_type=EventType.SERVICE_REVEALED,
            severity=EventSeverity.INFO,
            message="Password copied to clipboard",
            details={"name": record.name, "username": record.username},
        )
        return Outcome.REVEALED

    def search(self) -> Outcome:
        """Ask for part of a service name, then reveal among the matches."""
        term = self.prompter.text("Search", default="")
        return self.reveal(term or None)

    # ── Create ──────────────────────────────────────────────────────

    def create(self) -> Outcome:
        """Collect a new service and store its password encrypted.

        Duplicate (name, username) pairs are accepted.
        """
        try:
            self._require_key()
        except KeyAbsent as e:
            self._report("error", str(e))
            return Outcome.KEY_ABSENT

        try:
            name = validate_field("Name", self.prompter.text("Name", default="sample"))
            username = validate_field("Username", self.prompter.text("Username"))
        except ValidationError as e:
            self._report("error", str(e))
            return Outcome.INVALID_INPUT

        secret = self.prompter.secret("Password")

        with self.keys.borrow() as key:
            try:
                if key is None:
                    raise KeyAbsent("Security key is required to proceed")
                token = EncryptionService.encrypt(secret, key)
            except KeyAbsent as e:
                self._report("error", str(e))
                return Outcome.KEY_ABSENT
            except MalformedKey as e:
                self._report("error", str(e))
                return Outcome.INVALID_KEY
            finally:
                del secret

        row_id = self.records.insert(Record(name=name, username=username, password=token))

        self._report("ok", f"Service created: {name!r} ({username})")
        self.events.log_event(
            event_type=EventType.SERVICE_CREATED,
            severity=EventSeverity.INFO,
            message="Service created",
            details={"id": row_id, "name": name, "username": username},
        )
        return Outcome.CREATED

    # ── Delete ──────────────────────────────────────────────────────

    def delete(self) -> Outcome:
        """Delete every service, or a confirmed selection of them."""
        try:
            self._ensure_not_empty()
        except EmptyResult as e:
            self._report("error", str(e))
            return Outcome.EMPTY_VAULT

        mode = self.prompter.select(["All", "Selection"], "What to delete")
        if mode == 0:
            return self._delete_all()
        return self._delete_selection()

    def _delete_all(self) -> Outcome:
        if not self.prompter.confirm("Are you sure you want to delete all services"):
            self._report("info", "Nothing was deleted")
            return Outcome.CANCELLED

        removed = self.records.delete_all()
        self._report("ok", f"All services deleted ({removed})")
        self.events.log_event(
            event_type=EventType.SERVICES_DELETED,
            severity=EventSeverity.WARNING,
            message="All services deleted",
            details={"removed": removed},
        )
        return Outcome.DELETED

    def _delete_selection(self) -> Outcome:
        ordered = sort_records(self.records.all())
        chosen = self.prompter.multi_select(
            [record.label for record in ordered], "Services to delete"
        )
        if not chosen:
            self._report("info", "No services selected, nothing was deleted")
            return Outcome.NOTHING_SELECTED

        identities: List[Identity] = []
        for index in chosen:
            identity = ordered[index].identity
            if identity not in identities:
                identities.append(identity)
        labels = ", ".join(identity.label for identity in identities)

        if not self.prompter.confirm(f"Are you sure you wish to delete {labels}"):
            self._report("info", "Nothing was deleted")
            return Outcome.CANCELLED

        removed = 0
        for identity in identities:
            removed += self.records.delete_by_identity(identity.name, identity.username)

        self._report("ok", f"Services deleted: {labels}")
        self.events.log_event(
            event_type=EventType.SERVICES_DELETED,
            severity=EventSeverity.INFO,
            message="Selected services deleted",
            details={"services": [list(identity) for identity in identities], "removed": removed},
        )
        return Outcome.DELETED

    # ── Exit ────────────────────────────────────────────────────────

    def scrub_clipboard(self) -> None:
        """Overwrite the clipboard with a placeholder."""
        self.clipboard.copy(CLIPBOARD_PLACEHOLDER)
        self._report("info", "Clipboard has been erased")
        self.events.log_event(
            event_type=EventType.CLIPBOARD_SCRUBBED,
            severity=EventSeverity.INFO,
            message="Clipboard erased on exit",
        )
