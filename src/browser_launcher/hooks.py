"""Setup steps that reset a browser's per-run state before it is launched."""

import asyncio
import logging
import shutil
from pathlib import Path

from browser_launcher.catalog import BrowserDescriptor, Setup
from browser_launcher.context import LaunchContext

logger = logging.getLogger(__name__)

# Suppress the default-browser check and the welcome start page.
FIREFOX_PREFS = [
    'user_pref("browser.shell.checkDefaultBrowser", false);',
    'user_pref("browser.cache.disk.smart_size.first_run", false);',
]


def _remove_dir(path: Path):
    shutil.rmtree(path, ignore_errors=True)


def _reset_firefox_profile(profile_dir: Path):
    _remove_dir(profile_dir)
    profile_dir.mkdir(parents=True, exist_ok=True)
    (profile_dir / "prefs.js").write_text("\n".join(FIREFOX_PREFS), encoding="utf-8")


def redirect_page(url: str) -> str:
    return f"<script>window.location = '{url}'</script>"


def _write_redirect_page(page: Path, url: str):
    page.write_text(redirect_page(url), encoding="utf-8")


async def run_setup(descriptor: BrowserDescriptor, launch: LaunchContext):
    """Run the descriptor's setup step, if any. Failures are logged, not raised."""
    if descriptor.setup is None or descriptor.state_path is None:
        return

    target = Path(descriptor.state_path)
    try:
        if descriptor.setup is Setup.FIREFOX_PROFILE:
            await asyncio.to_thread(_reset_firefox_profile, target)
        elif descriptor.setup is Setup.REMOVE_DIR:
            await asyncio.to_thread(_remove_dir, target)
        elif descriptor.setup is Setup.REDIRECT_PAGE:
            await asyncio.to_thread(_write_redirect_page, target, launch.get_url())
    except (OSError, ValueError) as e:
        logger.warning(f"{descriptor.name}: setup {descriptor.setup.value} failed on {target}: {e}")
