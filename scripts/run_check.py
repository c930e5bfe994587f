"""
Run a single LTV check and exit.

Reads the same settings as the API (env/.env, then the environment):
  python -m scripts.run_check
"""

import asyncio
import logging

from pipeline.config import load_settings
from pipeline.monitor import check_positions

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")


def main():
    settings = load_settings()
    alerts = asyncio.run(check_positions(settings))
    print(f"Dispatched {len(alerts)} alert(s)")


if __name__ == "__main__":
    main()
