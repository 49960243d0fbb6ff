"""``wordchain run``: configure logging and serve with uvicorn."""

import argparse
import sys

from wordchain.cli._env import load_config
from wordchain.errors import ConfigurationError


def run_server(args: argparse.Namespace) -> None:
    """Start the server; exits 1 on configuration errors."""
    from wordchain.logging import configure_logging
    from wordchain.security.audit import log_sink, set_security_event_sink
    from wordchain.server.run import serve
    from wordchain.service import create_app

    overrides: dict[str, object] = {
        "host": args.host,
        "port": args.port,
        "log_format": args.log_format,
    }
    if args.insecure_cookies:
        overrides["cookie_secure"] = False
    if args.cors:
        overrides["allow_cors"] = True

    try:
        config = load_config(args, **overrides)
        app = create_app(config, drop_on_down=not args.keep_data)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    configure_logging(config.log_level, config.log_format)
    set_security_event_sink(log_sink)
    serve(app)
