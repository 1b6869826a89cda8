"""musicauth entrypoint.

Run with:
  python -m musicauth --config-path configs/authserver.yml
"""

import argparse
import logging

import uvicorn

from musicauth.app import create_app
from musicauth.auth import passwords
from musicauth.auth.session import SessionManager
from musicauth.config import DEFAULT_CONFIG_PATH, load_config
from musicauth.errors import ConfigError
from musicauth.infra.database import init_db, make_engine, ping
from musicauth.infra.sqlstore import SQLStore
from musicauth.logs import configure_logging

log = logging.getLogger("musicauth")


def build_app(cfg):
    if not cfg.database_url:
        raise ConfigError("database_url is not set")
    passwords.configure(
        time_cost=cfg.password_time_cost,
        memory_cost=cfg.password_memory_cost,
        parallelism=cfg.password_parallelism,
    )
    engine = make_engine(cfg.database_url)
    ping(engine)
    init_db(engine)
    return create_app(SQLStore(engine), SessionManager(cfg.session_key), cors_origin=cfg.cors_origin)


def main() -> None:
    parser = argparse.ArgumentParser(prog="musicauth")
    parser.add_argument("--config-path", default=DEFAULT_CONFIG_PATH, help="path to config file")
    args = parser.parse_args()

    cfg = load_config(args.config_path)
    configure_logging(cfg.log_level)
    app = build_app(cfg)
    host, port = cfg.bind()
    log.info("listening on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level=cfg.log_level.lower())


if __name__ == "__main__":
    main()
