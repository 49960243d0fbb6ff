"""Build an ``AppConfig`` from a dotenv file, the environment, and CLI flags."""

import argparse
import os
from pathlib import Path

from dotenv import dotenv_values

from wordchain.config import AppConfig


def load_config(args: argparse.Namespace, **overrides: object) -> AppConfig:
    """Process environment wins over the dotenv file; *overrides* win over both."""
    env: dict[str, str] = {}
    env_file = Path(args.env_file)
    if env_file.is_file():
        env.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    env.update(os.environ)
    return AppConfig.from_env(env, database_url=args.database, **overrides)
