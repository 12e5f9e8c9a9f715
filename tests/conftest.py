"""Shared fixtures: deterministic resolution contexts and fake command lookups."""

import pytest

from browser_launcher import probes
from browser_launcher.context import ResolutionContext


@pytest.fixture()
def linux_context(tmp_path):
    return ResolutionContext(platform="linux", temp_dir=str(tmp_path), home_dir="/home/tester")


@pytest.fixture()
def fake_commands(monkeypatch):
    """Install fake PATH lookups; call with the set of commands that resolve."""

    def install(available, bundled=()):
        async def lookup(command, platform):
            return command in available

        monkeypatch.setattr(probes, "lookup_command", lookup)
        monkeypatch.setattr(probes, "bundled_module_exists", lambda name: name in bundled)

    return install
