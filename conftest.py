import logging

import pytest

from walkthrough.testing import sample_script, sample_workflow

CREDENTIAL_VARS = (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "ELEVENLABS_API_KEY",
    "GEMINI_API_KEY",
    "AI_PROVIDER",
    "TTS_PROVIDER",
    "USE_MOCKS",
)


@pytest.fixture(autouse=True)
def clean_provider_env(monkeypatch):
    """Keep real credentials from a developer shell or .env out of every test"""
    for name in CREDENTIAL_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo any setup_logging() a test triggers"""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def workflow():
    return sample_workflow()


@pytest.fixture
def script():
    return sample_script()


@pytest.fixture
def recording(tmp_path):
    path = tmp_path / "recording.webm"
    path.write_bytes(b"fake recording")
    return path
