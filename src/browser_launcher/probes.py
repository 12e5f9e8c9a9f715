"""Probes deciding whether a catalog entry can be launched on this machine.

A probe never raises for a missing browser: anything it cannot determine
counts as "not supported".
"""

import asyncio
import importlib.util
import logging
import os

from browser_launcher.catalog import BrowserDescriptor, Probe
from browser_launcher.context import WIN32, ResolutionContext

logger = logging.getLogger(__name__)


async def path_exists(path: str) -> bool:
    return await asyncio.to_thread(os.path.exists, path)


async def lookup_command(command: str, platform: str) -> bool:
    """Check whether ``command`` resolves via ``where`` (Windows) or ``which``."""
    tool = "where" if platform == WIN32 else "which"
    try:
        proc = await asyncio.create_subprocess_exec(
            tool,
            command,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        returncode = await proc.wait()
    except OSError as e:
        logger.debug(f"{tool} {command} could not run: {e}")
        return False
    return returncode == 0


def bundled_module_exists(name: str) -> bool:
    """Check for a locally installed package named like the command."""
    try:
        return importlib.util.find_spec(name) is not None
    except (ImportError, ValueError) as e:
        logger.debug(f"Package lookup for {name} failed: {e}")
        return False


async def _first_existing(descriptor: BrowserDescriptor, context: ResolutionContext) -> str | None:
    for candidate in descriptor.executables:
        if await path_exists(candidate):
            return candidate
    return None


async def _first_on_path(descriptor: BrowserDescriptor, context: ResolutionContext) -> str | None:
    for candidate in descriptor.executables:
        if await lookup_command(candidate, context.platform):
            return candidate
    return None


async def _on_path_or_bundled(descriptor: BrowserDescriptor, context: ResolutionContext) -> str | None:
    found = await _first_on_path(descriptor, context)
    if found:
        return found
    for candidate in descriptor.executables:
        if await asyncio.to_thread(bundled_module_exists, candidate):
            return candidate
    return None


_STRATEGIES = {
    Probe.PATH_EXISTENCE: _first_existing,
    Probe.COMMAND_LOOKUP: _first_on_path,
    Probe.PATH_OR_BUNDLED: _on_path_or_bundled,
}


async def probe(descriptor: BrowserDescriptor, context: ResolutionContext) -> str | None:
    """Return the winning executable candidate, or None if none is usable."""
    found = await _STRATEGIES[descriptor.probe](descriptor, context)
    if found is None:
        logger.debug(f"{descriptor.name}: not found ({descriptor.probe.value})")
    else:
        logger.debug(f"{descriptor.name}: found {found}")
    return found


async def supported(descriptor: BrowserDescriptor, context: ResolutionContext) -> bool:
    return await probe(descriptor, context) is not None
