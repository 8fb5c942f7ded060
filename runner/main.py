from __future__ import annotations

import argparse
import logging

import uvicorn

from domain_exporter.server.app import create_app
from domain_exporter.utils.log import configure_logging
from runner.config import load_config

LOG = logging.getLogger("domain_exporter.runner")


def parse_listen(addr: str) -> tuple[str, int]:
    # ":10550" -> ("0.0.0.0", 10550)
    host, _, port = addr.rpartition(":")
    return host or "0.0.0.0", int(port)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Prometheus exporter for Domain listings")
    parser.add_argument("--listen", default=None, help="Address to listen on (default :10550)")
    parser.add_argument("--api-key", "--api_key", dest="api_key", default=None,
                        help="Domain API key (or DOMAIN_API_KEY)")
    parser.add_argument("--criteria-dir", default=None,
                        help="Directory of search criteria JSON files scraped on /metrics")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config = load_config(
        api_key=args.api_key,
        listen_addr=args.listen,
        criteria_dir=args.criteria_dir,
        log_level=args.log_level,
    )
    configure_logging(config.log_level)

    app = create_app(config)
    host, port = parse_listen(config.listen_addr)
    LOG.info("Exporter starting on addr %s", config.listen_addr)
    uvicorn.run(app, host=host, port=port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
