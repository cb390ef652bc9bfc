#!/usr/bin/python3

"""persistconf main() module.

Reads a service config file, resolves the persistence section and reports the result, exiting non-zero if the config
can't be used.

"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

import persistconf.utils as utils
from persistconf import exceptions as pce
from persistconf.logging import Logging

from .models.config.yaml import MainConfig


class PCMain:
    """
    Class to encapsulate all main() functionality.
    """

    logging: Logging

    def __init__(self):
        """Constructor."""

        self.logging = None
        self.logger = None

    def parse_args(self, argv: list[str] | None = None) -> argparse.Namespace:
        parser = argparse.ArgumentParser(prog="persistconf", description="Validate and resolve a persistence config")

        parser.add_argument("configfile", help="full path to config file (.yaml or .toml)", type=Path)
        parser.add_argument(
            "-D",
            "--debug",
            help="log level, overrides the one in the config file",
            default=None,
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        )
        parser.add_argument("-o", "--output", help="write the resolved config to this .yaml or .toml file", type=Path)
        parser.add_argument("--store-type", help="only print the type of the default store", action="store_true")
        parser.add_argument("-v", "--version", action="version", version="%(prog)s " + utils.__version__)

        return parser.parse_args(argv)

    def main(self, argv: list[str] | None = None) -> int:  # noqa: C901
        """persistconf entry point.

        Parse command line arguments, load configuration, set up logging, resolve the config.

        Returns:
            Exit status for the process.
        """
        args = self.parse_args(argv)
        config_file: Path = args.configfile.resolve()

        try:
            model = MainConfig.from_config_file(config_file)
        except ValidationError as e:
            print(f"Configuration error in: {config_file}")
            print(e)
            return 1
        except pce.ConfigReadFailure as e:
            pce.user_exception_block(logging.getLogger(), e, "Reading persistence configuration")
            return 1

        self.logging = Logging(model.log, args.debug)
        self.logger = self.logging.get_child("_main")

        self.logger.info("-" * 60)
        self.logger.info("persistconf version %s", utils.__version__)
        if utils.__version_comments__:
            self.logger.info("Additional version info: %s", utils.__version_comments__)
        self.logger.info("-" * 60)
        self.logger.info("Configuration read from: %s", config_file)
        self.logging.dump_log_config()

        utils.extra_field_warnings(model, self.logger)

        try:
            if args.store_type:
                print(model.persistence.default_store_type())
                return 0
            resolved = model.resolve()
        except pce.PersistenceConfigError as e:
            pce.user_exception_block(self.logger, e, "Resolving persistence configuration")
            return 1

        self.logger.info(
            "Default store '%s' uses %s",
            resolved.persistence.default_store,
            resolved.persistence.default_store_type(),
        )
        if resolved.persistence.has_advanced_visibility:
            self.logger.info("Advanced visibility store: %s", resolved.persistence.advanced_visibility_store)

        dump = resolved.model_dump(mode="json", by_alias=True, exclude_none=True)
        if args.output is not None:
            try:
                utils.write_config_file(args.output, **dump)
            except (OSError, ValueError) as e:
                pce.user_exception_block(self.logger, e, "Writing resolved configuration")
                return 1
            self.logger.info("Resolved configuration written to %s", args.output)
        else:
            print(json.dumps(dump, indent=4))

        return 0


def main():
    """Called when run from the command line."""
    pcmain = PCMain()
    sys.exit(pcmain.main())


if __name__ == "__main__":
    main()
