from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import Optional

import requests

from .fetch_config import load_fetch_config
from .lib import post
from .lib.command import CommandRunner, run_cmd
from .lib.env import PATHS, FetchPaths
from .lib.sysinfo import get_sysinfo
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .resolver import AnswerLocationError, AnswerSourceResolver

logger = logging.getLogger(__name__)


def fetch_answer(paths: FetchPaths = PATHS, *, runner: CommandRunner = run_cmd) -> str:
    """Resolve the answer location, then POST system info to it."""

    location = AnswerSourceResolver(paths, runner=runner).resolve()

    logger.info("Gathering system information.")
    payload = get_sysinfo(paths, runner=runner)

    return post.call(location.url, location.fingerprint, payload, timeout=paths.http_timeout)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="answer-fetch")
    p.add_argument("--config", default=None, help="YAML file overriding paths/labels/option names")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to log file")
    p.add_argument("--debug", action="store_true", help="Log command output")
    p.add_argument(
        "--resolve-only",
        action="store_true",
        help="Print the resolved answer URL and fingerprint as JSON instead of fetching",
    )

    args = p.parse_args(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if args.debug else logging.INFO)
    paths = load_fetch_config(args.config)

    try:
        if args.resolve_only:
            location = AnswerSourceResolver(paths).resolve()
            out = json.dumps(dataclasses.asdict(location), indent=2, sort_keys=True) + "\n"
        else:
            out = fetch_answer(paths)
    except AnswerLocationError as e:
        logger.error("%s", e)
        return 1
    except requests.RequestException as e:
        logger.error("Fetching answer failed: %s", e)
        return 1

    sys.stdout.write(out)
    return 0
