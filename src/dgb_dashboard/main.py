import argparse
import logging

from fastapi import FastAPI

from dgb_dashboard.config import Config
from dgb_dashboard.rpc import RpcGateway
from dgb_dashboard.server import create_app


LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


def main(config: Config = None) -> FastAPI:
    """Build the gateway and the FastAPI app from configuration."""
    if config is None:
        config = Config()

    # Node settings are fixed for the lifetime of the process
    node_config = config.get_node_config()
    gateway = RpcGateway(node_config)

    server_config = config.get_server_config()
    app = create_app(server_config, gateway)

    logging.info(f"Dashboard initialized for node {node_config.host}:{node_config.port} as '{node_config.user}'")
    return app


# App built on first get_app() call, reused afterwards
_global_app = None


def get_app() -> FastAPI:
    """Get or create the FastAPI app instance (``uvicorn --factory dgb_dashboard.main:get_app``)."""
    global _global_app
    if _global_app is None:
        _global_app = main()
    return _global_app


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="DigiByte node status dashboard")
    parser.add_argument("--config", help="Path to a JSON configuration file")
    parser.add_argument("--host", help="Address to listen on")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level"
    )
    return parser.parse_args(argv)


def run(argv=None):
    """Console entry point: start the dashboard with uvicorn."""
    import uvicorn

    args = parse_args(argv)
    config = Config(config_path=args.config)
    config.set_override('server', 'host', args.host)
    config.set_override('server', 'port', args.port)
    config.set_override('logging', 'level', args.log_level)
    if args.log_level:
        logging.getLogger().setLevel(args.log_level)

    server_config = config.get_server_config()
    app = main(config)

    # uvicorn handles SIGINT/SIGTERM: stop accepting connections and exit
    uvicorn.run(
        app,
        host=server_config.get('host', '0.0.0.0'),
        port=server_config['port'],
        log_level=str(config.get('logging', 'level', default='info')).lower()
    )


if __name__ == "__main__":
    run()
