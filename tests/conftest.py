"""
Pytest configuration and shared test utilities.

Every test runs in an empty temporary working directory with a fresh
configuration singleton, so a developer's config.yml or .env never leaks in.
"""

import asyncio

import pytest

from patternsmith.clipboard import ClipboardFeedback
from patternsmith.session import SessionController
from patternsmith.synthesizer import PatternSynthesizer, SynthesisRequest
from patternsmith.utils import config as config_module


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run each test against built-in defaults in a clean directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CONFIG_FILE", raising=False)
    monkeypatch.delenv("HTTP_PROXY", raising=False)
    config_module.reset_config()
    yield tmp_path
    config_module.reset_config()


class FakeGenerationService:
    """Scriptable async generation service that records every request.

    Responses are returned in order. An exception instance is raised instead
    of returned. With ``gate`` set, each call waits for the event before
    answering so tests can interleave other transitions.
    """

    def __init__(self, *responses, gate: asyncio.Event | None = None):
        self.responses = list(responses)
        self.requests: list[SynthesisRequest] = []
        self.gate = gate

    async def __call__(self, request: SynthesisRequest) -> str | None:
        self.requests.append(request)
        response = self.responses.pop(0) if self.responses else None
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(response, BaseException):
            raise response
        return response


def create_test_session(
    *responses,
    gate: asyncio.Event | None = None,
    mirror_presets: bool = True,
    test_mode: str = "enumerate",
    clipboard_writer=None,
) -> tuple[SessionController, FakeGenerationService]:
    """Factory for a controller wired to a fake generation service."""
    service = FakeGenerationService(*responses, gate=gate)
    synthesizer = PatternSynthesizer(service=service, model_identifier="test-model", timeout=5.0)
    writer = clipboard_writer or (lambda text: True)
    clipboard = ClipboardFeedback(writer=writer, feedback_seconds=0.05)
    session = SessionController(
        synthesizer=synthesizer,
        clipboard=clipboard,
        mirror_presets=mirror_presets,
        test_mode=test_mode,
    )
    return session, service
