"""Inventory server -- reports the browsers this machine can launch over HTTP."""

from flask import Flask, jsonify, request
from flask_cors import CORS

from browser_launcher.catalog import catalog_for
from browser_launcher.config import LaunchConfig
from browser_launcher.context import LaunchContext, ResolutionContext, normalize_platform
from browser_launcher.launcher import build_command, find_browser
from browser_launcher.resolver import available_browsers

app = Flask(__name__)
CORS(app, resources={r"/*": {"origins": "*"}})

DEFAULT_URL = "about:blank"


def _platform_arg() -> str:
    return normalize_platform(request.args.get("platform"))


@app.get("/status")
def status():
    """Health check."""
    return jsonify({"server": "ok", "platform": normalize_platform()})


@app.get("/browsers")
def browsers():
    """Resolve and list the launchable browsers. Re-probes on every request."""
    platform = _platform_arg()
    found = available_browsers(platform, ResolutionContext.from_environment(platform))
    return jsonify({"platform": platform, "browsers": [b.to_dict() for b in found]})


@app.get("/catalog/<platform>")
def catalog(platform: str):
    """Full unprobed catalog for a platform; empty for unknown platforms."""
    platform = normalize_platform(platform)
    entries = catalog_for(platform, ResolutionContext.from_environment(platform))
    return jsonify({"platform": platform, "browsers": [b.to_dict() for b in entries]})


@app.get("/browsers/<name>/command")
def command(name: str):
    """Command line for one available browser against ``?url=``."""
    platform = _platform_arg()
    browser = find_browser(available_browsers(platform, ResolutionContext.from_environment(platform)), name)
    if browser is None:
        return jsonify({"error": f"Browser not available: {name}"}), 404

    debug_port = request.args.get("debug_port", type=int)
    launch = LaunchContext(
        url=request.args.get("url", DEFAULT_URL),
        config=LaunchConfig.from_options(debug_port=debug_port, args=request.args.getlist("arg")),
    )
    return jsonify({"name": browser.name, "command": build_command(browser, launch)})


def run_server(host: str = "127.0.0.1", port: int = 18322):
    """Start the inventory server (blocking)."""
    app.run(host=host, port=port, debug=False, use_reloader=False)
