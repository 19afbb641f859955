"""``rose run`` — serve an app through its platform adapter."""

import argparse
import sys

from rose.cli._resolve import resolve_app
from rose.platform.asgi import ASGIPlatform


def run_app(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it; CLI flags override app config."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    workers = getattr(args, "workers", None)
    if workers is not None:
        if not isinstance(app.platform, ASGIPlatform):
            print("Error: --workers requires the ASGI platform", file=sys.stderr)
            raise SystemExit(1)
        app.platform.workers = workers

    app.serve(host=args.host, port=args.port)
