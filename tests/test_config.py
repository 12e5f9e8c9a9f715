"""Tests for launch configuration and contexts."""

from browser_launcher.config import HEADLESS_ARGS, HEADLESS_DEBUG_PORT, LaunchConfig
from browser_launcher.context import LaunchContext, ResolutionContext


class TestLaunchConfig:
    def test_missing_keys_default(self):
        config = LaunchConfig()
        assert config.get(HEADLESS_DEBUG_PORT) is None
        assert config.get(HEADLESS_ARGS, []) == []

    def test_from_options_skips_unset(self):
        assert LaunchConfig.from_options().to_dict() == {}
        config = LaunchConfig.from_options(debug_port=9000, args=["--a"])
        assert config.to_dict() == {HEADLESS_DEBUG_PORT: 9000, HEADLESS_ARGS: ["--a"]}


class TestContexts:
    def test_launch_context_reads_config(self):
        launch = LaunchContext(url="http://x/", config=LaunchConfig({HEADLESS_DEBUG_PORT: 1234}))
        assert launch.get_url() == "http://x/"
        assert launch.get(HEADLESS_DEBUG_PORT) == 1234

    def test_environment_context_prefers_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        ctx = ResolutionContext.from_environment("linux2")
        assert ctx.platform == "linux"
        assert ctx.home_dir == str(tmp_path)
        assert ctx.temp_dir

    def test_environment_context_falls_back_to_userprofile(self, monkeypatch, tmp_path):
        monkeypatch.delenv("HOME", raising=False)
        monkeypatch.setenv("USERPROFILE", str(tmp_path))
        assert ResolutionContext.from_environment("win32").home_dir == str(tmp_path)
