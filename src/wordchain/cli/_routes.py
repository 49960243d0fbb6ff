"""``wordchain routes``: print the route tree with its methods."""

import argparse
import sys
from dataclasses import replace

from wordchain.cli._env import load_config
from wordchain.errors import ConfigurationError
from wordchain.routing.dispatch import format_tree


def run_routes(args: argparse.Namespace) -> None:
    from wordchain.service import create_app

    try:
        config = load_config(args)
        if not config.secret_key:
            # printing the tree needs no secret
            config = replace(config, secret_key="-")
        app = create_app(config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"{'PATH':<24} {'METHODS':<20} NODE")
    print("-" * 60)
    for line in format_tree(app.root):
        print(line)
