"""Per-platform catalogs of the browsers we know how to launch."""

import ntpath
import posixpath
from dataclasses import dataclass, field
from enum import Enum

from browser_launcher.context import DARWIN, FREEBSD, LINUX, SUNOS, WIN32, ResolutionContext, normalize_platform

BROWSER_PROTOCOL = "browser"

_CHROME_FLAGS = ["--no-default-browser-check", "--no-first-run", "--ignore-certificate-errors"]


class Probe(str, Enum):
    PATH_EXISTENCE = "path-existence"
    COMMAND_LOOKUP = "command-lookup"
    PATH_OR_BUNDLED = "path-or-bundled"


class Setup(str, Enum):
    FIREFOX_PROFILE = "firefox-profile"
    REMOVE_DIR = "remove-dir"
    REDIRECT_PAGE = "redirect-page"


class ArgsBuilder(str, Enum):
    HEADLESS = "headless"
    REDIRECT_PAGE = "redirect-page"


@dataclass
class BrowserDescriptor:
    """How to detect and launch one browser on one platform."""

    name: str
    executables: tuple[str, ...]
    probe: Probe
    args: list[str] = field(default_factory=list)
    args_builder: ArgsBuilder | None = None
    setup: Setup | None = None
    state_path: str | None = None
    headless: bool = False
    protocol: str = BROWSER_PROTOCOL
    exe: str | None = None

    def __post_init__(self):
        if isinstance(self.executables, str):
            self.executables = (self.executables,)
        self.executables = tuple(self.executables)
        if not self.executables:
            raise ValueError(f"{self.name}: at least one executable candidate is required")

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "protocol": self.protocol,
            "exe": self.exe,
            "executables": list(self.executables),
            "args": list(self.args),
            "args_builder": self.args_builder.value if self.args_builder else None,
            "setup": self.setup.value if self.setup else None,
            "state_path": self.state_path,
            "headless": self.headless,
        }


def _firefox(exes, profile_dir: str, extra_args: list[str] | None = None, probe=Probe.PATH_EXISTENCE):
    return BrowserDescriptor(
        name="Firefox",
        executables=exes,
        probe=probe,
        args=[*(extra_args or []), "-profile", profile_dir],
        setup=Setup.FIREFOX_PROFILE,
        state_path=profile_dir,
    )


def _chromium_family(name: str, exes, data_dir: str, test_type: bool = True, probe=Probe.PATH_EXISTENCE):
    args = [f"--user-data-dir={data_dir}", *_CHROME_FLAGS]
    if test_type:
        args.append("--test-type")
    return BrowserDescriptor(
        name=name,
        executables=exes,
        probe=probe,
        args=args,
        setup=Setup.REMOVE_DIR,
        state_path=data_dir,
    )


def _opera(exes, data_dir: str):
    return BrowserDescriptor(
        name="Opera",
        executables=exes,
        probe=Probe.PATH_EXISTENCE,
        args=[f"--user-data-dir={data_dir}", "-pd", data_dir],
        setup=Setup.REMOVE_DIR,
        state_path=data_dir,
    )


def _phantomjs():
    return BrowserDescriptor(
        name="PhantomJS",
        executables=("phantomjs",),
        probe=Probe.PATH_OR_BUNDLED,
        args_builder=ArgsBuilder.HEADLESS,
        headless=True,
    )


def _windows(ctx: ResolutionContext) -> list[BrowserDescriptor]:
    join = ntpath.join
    tmp, home = ctx.temp_dir, ctx.home_dir
    program_files = ("C:\\Program Files", "C:\\Program Files (x86)")
    return [
        BrowserDescriptor(
            name="IE",
            executables=tuple(join(root, "Internet Explorer", "iexplore.exe") for root in program_files),
            probe=Probe.PATH_EXISTENCE,
        ),
        _firefox(
            tuple(join(root, "Mozilla Firefox", "firefox.exe") for root in program_files),
            join(tmp, "testem.firefox"),
        ),
        _chromium_family(
            "Chrome",
            (
                join(home, "Local Settings", "Application Data", "Google", "Chrome", "Application", "chrome.exe"),
                join(home, "AppData", "Local", "Google", "Chrome", "Application", "chrome.exe"),
                *(join(root, "Google", "Chrome", "Application", "Chrome.exe") for root in program_files),
            ),
            join(tmp, "testem.chrome"),
        ),
        BrowserDescriptor(
            name="Safari",
            executables=tuple(join(root, "Safari", "safari.exe") for root in program_files),
            probe=Probe.PATH_EXISTENCE,
        ),
        _opera(
            tuple(join(root, "Opera", "opera.exe") for root in program_files),
            join(tmp, "testem.opera"),
        ),
        _phantomjs(),
    ]


def _app_bundle(home: str, bundle: str, binary: str) -> tuple[str, str]:
    """Per-user install first, then the system-wide /Applications one."""
    relative = posixpath.join(f"{bundle}.app", "Contents", "MacOS", binary)
    return (
        posixpath.join(home, "Applications", relative),
        posixpath.join("/Applications", relative),
    )


def _mac(ctx: ResolutionContext) -> list[BrowserDescriptor]:
    join = posixpath.join
    tmp, home = ctx.temp_dir, ctx.home_dir
    redirect_page = join(tmp, "testem.safari.html")
    return [
        _chromium_family(
            "Chrome",
            _app_bundle(home, "Google Chrome", "Google Chrome"),
            join(tmp, "testem.chrome"),
        ),
        _chromium_family(
            "Chrome Canary",
            _app_bundle(home, "Google Chrome Canary", "Google Chrome Canary"),
            join(tmp, "testem.chrome-canary"),
        ),
        _firefox(_app_bundle(home, "Firefox", "firefox"), join(tmp, "testem.firefox")),
        BrowserDescriptor(
            name="Safari",
            executables=_app_bundle(home, "Safari", "Safari"),
            probe=Probe.PATH_EXISTENCE,
            args_builder=ArgsBuilder.REDIRECT_PAGE,
            setup=Setup.REDIRECT_PAGE,
            state_path=redirect_page,
        ),
        _opera(_app_bundle(home, "Opera", "Opera"), join(tmp, "testem.opera")),
        _phantomjs(),
    ]


def _linux(ctx: ResolutionContext) -> list[BrowserDescriptor]:
    join = posixpath.join
    tmp = ctx.temp_dir
    return [
        _firefox(("firefox",), join(tmp, "testem.firefox"), extra_args=["-no-remote"], probe=Probe.COMMAND_LOOKUP),
        _chromium_family(
            "Chrome", ("google-chrome",), join(tmp, "testem.chrome"), test_type=False, probe=Probe.COMMAND_LOOKUP
        ),
        _chromium_family(
            "Chromium",
            ("chromium", "chromium-browser"),
            join(tmp, "testem.chromium"),
            test_type=False,
            probe=Probe.COMMAND_LOOKUP,
        ),
        _phantomjs(),
    ]


def _headless_only(ctx: ResolutionContext) -> list[BrowserDescriptor]:
    return [_phantomjs()]


_BUILDERS = {
    WIN32: _windows,
    DARWIN: _mac,
    LINUX: _linux,
    SUNOS: _headless_only,
    FREEBSD: _headless_only,
}


def catalog_for(platform: str, context: ResolutionContext | None = None) -> list[BrowserDescriptor]:
    """Return the full, unprobed browser catalog for a platform.

    Accepts ``sys.platform`` style ids. Descriptors are built fresh on every
    call. Unknown platforms get ``[]``.
    """
    platform = normalize_platform(platform)
    builder = _BUILDERS.get(platform)
    if builder is None:
        return []
    if context is None:
        context = ResolutionContext.from_environment(platform)
    return builder(context)
