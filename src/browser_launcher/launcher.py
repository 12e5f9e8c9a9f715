"""Turn a resolved browser into the command line that starts it."""

import asyncio
import logging
import os
import subprocess

from browser_launcher.catalog import ArgsBuilder, BrowserDescriptor
from browser_launcher.config import HEADLESS_ARGS, HEADLESS_DEBUG_PORT
from browser_launcher.context import ASSETS_DIR, LaunchContext
from browser_launcher.hooks import run_setup

logger = logging.getLogger(__name__)

HEADLESS_SCRIPT = ASSETS_DIR / "phantom.js"


def build_headless_args(launch: LaunchContext, script: str = str(HEADLESS_SCRIPT)) -> list[str]:
    """Script and URL, after the optional debugger flags and raw user args."""
    options = [script, launch.get_url()]
    debug_port = launch.get(HEADLESS_DEBUG_PORT)
    if debug_port:
        options = [f"--remote-debugger-port={debug_port}", "--remote-debugger-autorun=true", *options]
    user_args = launch.get(HEADLESS_ARGS)
    if user_args:
        options = [*user_args, *options]
    return options


def build_args(browser: BrowserDescriptor, launch: LaunchContext) -> list[str]:
    args = list(browser.args)
    if browser.args_builder is ArgsBuilder.HEADLESS:
        args.extend(build_headless_args(launch))
    elif browser.args_builder is ArgsBuilder.REDIRECT_PAGE:
        args.append(browser.state_path)
    return args


def build_command(browser: BrowserDescriptor, launch: LaunchContext) -> list[str]:
    if browser.exe is None:
        raise ValueError(f"{browser.name} has not been resolved to an executable")
    return [browser.exe, *build_args(browser, launch)]


async def prepare(browser: BrowserDescriptor, launch: LaunchContext) -> list[str]:
    """Reset the browser's per-run state, then return its command line."""
    await run_setup(browser, launch)
    return build_command(browser, launch)


def find_browser(browsers: list[BrowserDescriptor], name: str) -> BrowserDescriptor | None:
    wanted = name.lower()
    for browser in browsers:
        if browser.name.lower() == wanted:
            return browser
    return None


def launch_browser(browser: BrowserDescriptor, launch: LaunchContext) -> subprocess.Popen:
    """Launch the browser pointed at the launch URL. Returns the process handle."""
    args = asyncio.run(prepare(browser, launch))
    logger.info(f"Launching {browser.name}: {' '.join(args)}")

    proc = subprocess.Popen(
        args,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        shell=os.name == "nt" and browser.headless,
    )
    return proc
