# Main script: load configuration, set up logging and serve the mirror gateway
import argparse
import logging
import os
import sys

import uvicorn

import constants
from config_loader import load_config
from logger_setup import setup_logging
from gateway import create_app


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Serve the site mirror task gateway.")
    parser.add_argument("--config", help=f"JSON config file (default: {constants.DEFAULT_CONFIG_FILE} if present)")
    parser.add_argument("--host", help="Interface to bind, overrides the config")
    parser.add_argument("--port", type=int, help="Port to bind, overrides the config")
    return parser.parse_args(argv)


def _config_path(args):
    if args.config:
        return args.config
    if os.path.exists(constants.DEFAULT_CONFIG_FILE):
        return constants.DEFAULT_CONFIG_FILE
    return None


# --- Main Execution ---
def main(argv=None):
    """Main function: build the app from configuration and run it until interrupted."""
    args = parse_args(argv)
    try:
        config = load_config(_config_path(args))
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        # Logging is not configured yet
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.host:
        config['host'] = args.host
    if args.port:
        config['port'] = args.port

    setup_logging(config['log_file'], config['log_level'])
    logging.info("--- Starting Site Mirror Service ---")
    logging.info(f"Mirror root: {os.path.abspath(config['mirror_root'])}")
    logging.info(f"Asset host substrings: {', '.join(config['asset_host_substrings'])}")

    app = create_app(config)
    # log_config=None keeps uvicorn on the handlers installed above
    uvicorn.run(app, host=config['host'], port=config['port'], log_config=None)

    logging.info("--- Site Mirror Service Stopped ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())
