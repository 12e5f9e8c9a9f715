"""Tests for building launch commands from resolved browsers."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest

from browser_launcher.catalog import catalog_for
from browser_launcher.config import LaunchConfig
from browser_launcher.context import LaunchContext, ResolutionContext
from browser_launcher.launcher import (
    HEADLESS_SCRIPT,
    build_args,
    build_command,
    build_headless_args,
    find_browser,
    launch_browser,
    prepare,
)
from browser_launcher.resolver import wrap_with_session_helper

URL = "http://localhost:7357/42"


def _browser(platform, name, tmp_path, exe=None):
    ctx = ResolutionContext(platform=platform, temp_dir=str(tmp_path), home_dir=str(tmp_path))
    browser = find_browser(catalog_for(platform, ctx), name)
    browser.exe = exe or browser.executables[0]
    return browser


class TestHeadlessArgs:
    def test_script_then_url(self):
        assert build_headless_args(LaunchContext(url=URL)) == [str(HEADLESS_SCRIPT), URL]

    def test_debug_port_prefixes_debugger_flags(self):
        launch = LaunchContext(url=URL, config=LaunchConfig({"headless_debug_port": 9000}))
        assert build_headless_args(launch) == [
            "--remote-debugger-port=9000",
            "--remote-debugger-autorun=true",
            str(HEADLESS_SCRIPT),
            URL,
        ]

    def test_user_args_come_first(self):
        config = LaunchConfig.from_options(debug_port=9000, args=["--ignore-ssl-errors=true"])
        args = build_headless_args(LaunchContext(url=URL, config=config))
        assert args[0] == "--ignore-ssl-errors=true"
        assert args[1] == "--remote-debugger-port=9000"
        assert args[-2:] == [str(HEADLESS_SCRIPT), URL]

    def test_headless_script_is_shipped(self):
        assert HEADLESS_SCRIPT.exists()


class TestBuildCommand:
    def test_fixed_args(self, tmp_path):
        firefox = _browser("linux", "Firefox", tmp_path)
        assert build_command(firefox, LaunchContext(url=URL)) == [
            "firefox",
            "-no-remote",
            "-profile",
            f"{tmp_path}/testem.firefox",
        ]

    def test_wrapped_browser(self, tmp_path):
        chrome = _browser("linux", "Chrome", tmp_path)
        wrap_with_session_helper(chrome)
        command = build_command(chrome, LaunchContext(url=URL))
        assert command[:3] == ["dbus-launch", "--exit-with-session", "google-chrome"]

    def test_redirect_page_is_sole_argument(self, tmp_path):
        safari = _browser("darwin", "Safari", tmp_path)
        assert build_args(safari, LaunchContext(url=URL)) == [f"{tmp_path}/testem.safari.html"]

    def test_headless_builder(self, tmp_path):
        phantom = _browser("linux", "PhantomJS", tmp_path)
        assert build_command(phantom, LaunchContext(url=URL)) == ["phantomjs", str(HEADLESS_SCRIPT), URL]

    def test_unresolved_browser_rejected(self, tmp_path):
        ctx = ResolutionContext(platform="linux", temp_dir=str(tmp_path), home_dir=str(tmp_path))
        firefox = catalog_for("linux", ctx)[0]
        with pytest.raises(ValueError):
            build_command(firefox, LaunchContext(url=URL))


class TestPrepare:
    def test_runs_setup_before_returning_command(self, tmp_path):
        firefox = _browser("linux", "Firefox", tmp_path)
        command = asyncio.run(prepare(firefox, LaunchContext(url=URL)))
        assert (tmp_path / "testem.firefox" / "prefs.js").exists()
        assert command[0] == "firefox"

    def test_writes_redirect_page_for_url(self, tmp_path):
        safari = _browser("darwin", "Safari", tmp_path)
        asyncio.run(prepare(safari, LaunchContext(url=URL)))
        assert URL in (tmp_path / "testem.safari.html").read_text(encoding="utf-8")


class TestFindBrowser:
    def test_case_insensitive(self, tmp_path):
        ctx = ResolutionContext(platform="darwin", temp_dir=str(tmp_path), home_dir=str(tmp_path))
        browsers = catalog_for("darwin", ctx)
        assert find_browser(browsers, "chrome canary").name == "Chrome Canary"
        assert find_browser(browsers, "Edge") is None


class TestLaunchBrowser:
    def test_spawns_prepared_command(self, tmp_path):
        chromium = _browser("linux", "Chromium", tmp_path)
        data_dir = tmp_path / "testem.chromium"
        data_dir.mkdir()

        with patch("browser_launcher.launcher.subprocess.Popen", return_value=MagicMock(pid=99)) as popen:
            proc = launch_browser(chromium, LaunchContext(url=URL))

        assert proc.pid == 99
        assert not data_dir.exists()
        args = popen.call_args.args[0]
        assert args[0] == "chromium"
        assert args[1] == f"--user-data-dir={data_dir}"
