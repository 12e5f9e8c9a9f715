"""Launch-time configuration for browsers that need per-run arguments."""

HEADLESS_DEBUG_PORT = "headless_debug_port"
HEADLESS_ARGS = "headless_args"


class LaunchConfig:
    """User overrides read by argument builders through ``get(key)``."""

    def __init__(self, values: dict | None = None):
        self._values = dict(values or {})

    @classmethod
    def from_options(cls, debug_port: int | None = None, args: list[str] | None = None) -> "LaunchConfig":
        values = {}
        if debug_port:
            values[HEADLESS_DEBUG_PORT] = debug_port
        if args:
            values[HEADLESS_ARGS] = list(args)
        return cls(values)

    def get(self, key: str, default=None):
        return self._values.get(key, default)

    def to_dict(self) -> dict:
        return dict(self._values)
