import argparse
import logging
import sys

from phrasey import app, config, database, utils
from phrasey.exceptions import ConfigError, DatabaseError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="phrasey", description="Terminal phrase translation trainer")
    parser.add_argument("-c", "--config-path", default="config.toml", help="Path to the configuration file")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        cfg = config.load_config(args.config_path)
        utils.logging_setup(cfg.log_level, cfg.log_dir_uri)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    logger = logging.getLogger("phrasey")
    logger.debug(f"Command-line arguments parsed: {args}")
    try:
        with database.DatabaseManager(cfg.db_conn_string) as db:
            app.App(cfg, db).run()
    except DatabaseError as e:
        logger.error(f"Database error: {e}")
        print(f"Database error: {e}", file=sys.stderr)
        return 1
    except Exception:
        logger.exception("App crashed")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
