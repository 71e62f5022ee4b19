"""Block until the Leitner API answers its health check (used before smoke tests)."""

import logging
import sys
import time

import requests

from leitner.application.config import AppConfig, resolve_config
from leitner.consts import VERSION

logger = logging.getLogger("leitner.scripts.wait")

MAX_RETRIES = 30
DELAY = 1.0


def health_url(config: AppConfig) -> str:
    # A wildcard bind address is not connectable; poll loopback instead.
    host = "127.0.0.1" if config.host in ("0.0.0.0", "::") else config.host
    return f"http://{host}:{config.port}/health"


def wait_for_server(
    url: str,
    retries: int = MAX_RETRIES,
    delay: float = DELAY,
    session: requests.Session | None = None,
) -> str | None:
    """
    Poll ``url`` until it reports ``status: ok``.

    Returns:
        The server's reported version, or None if it never came up.
    """
    session = session or requests.Session()
    for attempt in range(1, retries + 1):
        try:
            response = session.get(url, timeout=delay)
            if response.ok and response.json().get("status") == "ok":
                return response.json().get("version")
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.debug(f"Attempt {attempt}/{retries} failed: {e}")
        if attempt < retries:
            time.sleep(delay)
    return None


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    url = health_url(resolve_config())
    logger.info(f"Waiting for Leitner server at {url}...")

    version = wait_for_server(url)
    if version is None:
        logger.error(f"Timed out after {MAX_RETRIES} attempts.")
        return 1
    if version != VERSION:
        logger.warning(f"Server reports v{version}, client is v{VERSION}.")
    logger.info(f"Leitner server is ready (v{version}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
