"""Resolve which catalog browsers are actually launchable on this machine."""

import asyncio
import dataclasses
import logging

from browser_launcher import probes
from browser_launcher.catalog import BROWSER_PROTOCOL, BrowserDescriptor, catalog_for
from browser_launcher.context import LINUX, ResolutionContext, normalize_platform

logger = logging.getLogger(__name__)

# Launching through dbus-launch avoids a Chrome startup race on Linux:
# https://github.com/angular/protractor/issues/2419
SESSION_HELPER = "dbus-launch"


def wrap_with_session_helper(browser: BrowserDescriptor, helper: str = SESSION_HELPER):
    browser.args = ["--exit-with-session", browser.exe, *browser.args]
    browser.exe = helper


async def _helper_available(platform: str) -> bool:
    if platform != LINUX:
        return False
    return await probes.lookup_command(SESSION_HELPER, platform)


async def resolve(platform: str | None = None, context: ResolutionContext | None = None) -> list[BrowserDescriptor]:
    """Return the browsers of the platform catalog that can be launched here.

    Every probe runs concurrently; the result keeps catalog order. On Linux,
    when dbus-launch is available, windowed browsers are rewritten to launch
    through it.
    """
    if context is None:
        context = ResolutionContext.from_environment(platform)
    platform = normalize_platform(platform if platform is not None else context.platform)
    if context.platform != platform:
        context = dataclasses.replace(context, platform=platform)

    browsers = catalog_for(platform, context)
    for browser in browsers:
        browser.protocol = BROWSER_PROTOCOL

    *found, use_helper = await asyncio.gather(
        *(probes.probe(browser, context) for browser in browsers),
        _helper_available(platform),
    )

    available = []
    for browser, exe in zip(browsers, found):
        if exe is None:
            continue
        browser.exe = exe
        available.append(browser)

    if use_helper:
        for browser in available:
            if not browser.headless:
                wrap_with_session_helper(browser)

    logger.info(f"{len(available)} of {len(browsers)} browsers available on {platform}")
    return available


def available_browsers(platform: str | None = None, context: ResolutionContext | None = None) -> list[BrowserDescriptor]:
    """Blocking wrapper around resolve() for callers outside an event loop."""
    return asyncio.run(resolve(platform, context))
