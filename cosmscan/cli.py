"""Command-line entry points of the indexer and the API server."""

import argparse
import logging

from cosmscan.config import load_indexer_config, load_server_config
from cosmscan.indexer import Indexer
from cosmscan.server import ApiServer

log = logging.getLogger(__name__)


def _parse_args(prog, description, argv):
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument("-f", "--filename", required=True, help="configuration file (TOML)")
    return parser.parse_args(argv)


def _load(loader, filename):
    try:
        return loader(filename)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"wrong config file location: {filename}") from exc


def _setup_logging():
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def indexer_main(argv=None):
    """Run the indexer with the configuration file named on the command line."""
    _setup_logging()
    args = _parse_args("cosmscan-indexer", "Index a chain into the database.", argv)
    config = _load(load_indexer_config, args.filename)
    try:
        Indexer(config).start()
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        log.error("unexpected error during fetching blockchain: %r", exc)
        raise SystemExit("teardown the indexer") from exc
    log.info("indexer finished")
    return 0


def server_main(argv=None):
    """Run the API server with the configuration file named on the command line."""
    _setup_logging()
    args = _parse_args("cosmscan-server", "Serve indexed chain data over HTTP.", argv)
    config = _load(load_server_config, args.filename)
    try:
        ApiServer(config).run()
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        log.error("server stopped unexpectedly %s", exc)
        return 1
    log.info("server has been stopped")
    return 0