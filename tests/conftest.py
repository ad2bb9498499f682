"""
Shared pytest fixtures for the SafePass test suite.

Autouse fixtures below isolate tests from the user's real files:
  - Event logger -> temp directory  (no test events in ~/.safepass/logs)
  - HOME / cwd    -> temp directory  (default key/db paths and .env lookup)

The fake collaborators replay queued answers so vault operations can run
without a terminal or a clipboard.
"""

from collections import deque

import pytest

from safepass.vault import EncryptionService, KeyStore, Record, RecordStore, VaultService


@pytest.fixture(autouse=True)
def _isolate_event_log(tmp_path, monkeypatch):
    """Redirect the global EventLogger to a temp directory for every test."""
    import safepass.core.event_log as event_mod

    old_logger = event_mod._event_logger
    event_mod._event_logger = None

    orig_init = event_mod.EventLogger.__init__

    def patched_init(self, log_dir=None):
        orig_init(self, log_dir=log_dir or tmp_path / "logs")

    monkeypatch.setattr(event_mod.EventLogger, "__init__", patched_init)

    yield

    if event_mod._event_logger is not None:
        event_mod._event_logger.close()
    event_mod._event_logger = old_logger


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path, monkeypatch):
    """Point HOME and cwd at a temp directory and clear SAFEPASS_* vars."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    for var in ("SAFEPASS_KEY_FILE", "SAFEPASS_DB_PATH", "SAFEPASS_LOG_DIR"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


# ── Fake collaborators ───────────────────────────────────────────────


class FakePrompter:
    """Replays queued answers and records what was asked."""

    def __init__(self):
        self._answers = {
            "confirm": deque(),
            "text": deque(),
            "secret": deque(),
            "select": deque(),
            "multi_select": deque(),
        }
        self.calls = []

    def queue(self, **answers):
        for kind, values in answers.items():
            self._answers[kind].extend(values)
        return self

    def _next(self, kind, prompt):
        self.calls.append((kind, prompt))
        if not self._answers[kind]:
            raise AssertionError(f"Unexpected {kind} prompt: {prompt!r}")
        return self._answers[kind].popleft()

    def asked(self, kind):
        return [prompt for k, prompt in self.calls if k == kind]

    def confirm(self, question, default=True):
        return self._next("confirm", question)

    def text(self, prompt, default=""):
        return self._next("text", prompt)

    def secret(self, prompt):
        return self._next("secret", prompt)

    def select(self, items, title):
        return self._next("select", list(items))

    def multi_select(self, items, title):
        return self._next("multi_select", list(items))


class FakeRenderer:
    def __init__(self):
        self.messages = []

    def display(self, severity, message):
        self.messages.append((severity, message))

    def last(self):
        return self.messages[-1]


class FakeClipboard:
    def __init__(self):
        self.copies = []

    def copy(self, text):
        self.copies.append(text)


@pytest.fixture
def prompter():
    return FakePrompter()


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def clipboard():
    return FakeClipboard()


@pytest.fixture
def record_store(tmp_path):
    return RecordStore(tmp_path / "vault.db3")


@pytest.fixture
def key_store(tmp_path):
    """Key store with no key on disk yet."""
    return KeyStore(tmp_path / "safepass.key")


@pytest.fixture
def keyed_store(key_store):
    """Key store with a key already created."""
    key_store.create()
    return key_store


@pytest.fixture
def service(record_store, keyed_store, prompter, renderer, clipboard):
    return VaultService(record_store, keyed_store, prompter, renderer, clipboard)


@pytest.fixture
def add_record(record_store, keyed_store):
    """Insert a record encrypted with the on-disk key."""

    def _add(name, username, password="s3cret"):
        with keyed_store.borrow() as key:
            token = EncryptionService.encrypt(password, key)
        record_store.insert(Record(name=name, username=username, password=token))

    return _add
