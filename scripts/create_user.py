#!/usr/bin/env python3
from __future__ import annotations

import argparse
from getpass import getpass

from musicauth.config import DEFAULT_CONFIG_PATH, load_config
from musicauth.core.models import User
from musicauth.errors import ConflictError, ValidationError
from musicauth.infra.database import init_db, make_engine
from musicauth.infra.sqlstore import SQLStore


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config-path", default=DEFAULT_CONFIG_PATH)
    args = parser.parse_args()

    cfg = load_config(args.config_path)
    if not cfg.database_url:
        raise SystemExit("database_url is not set")
    engine = make_engine(cfg.database_url)
    init_db(engine)
    store = SQLStore(engine)

    login = input("Login: ").strip()
    stage_name = input("Stage name: ").strip()

    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")

    u = User(login=login, password=pw1, stage_name=stage_name)
    try:
        store.user.create(u)
    except ValidationError as e:
        raise SystemExit(f"Invalid user: {e}")
    except ConflictError:
        raise SystemExit(f"Login {login!r} already exists")
    print(f"OK -> id {u.id}")


if __name__ == "__main__":
    main()
