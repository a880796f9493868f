#!/usr/bin/env python3

import sys
import argparse
import importlib.metadata
from pathlib import Path

import flerr.logging
import flerr.config
from flerr.simulate import SimulateSubcommand

def main(argv=None) -> int:
    """This is the main function of the flerr CLI."""
    if argv is None:
        argv = sys.argv[1:]

    subcommand_name_class_map = {SimulateSubcommand.name: SimulateSubcommand}

    parser = argparse.ArgumentParser(
        prog="flerr",
        description="flerr runs resource cleanup scenarios and reports their joined errors",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    subparsers = parser.add_subparsers(title="subcommands", dest="subcommand", required=True)
    for name, cls in subcommand_name_class_map.items():
        subparser = subparsers.add_parser(name)
        cls.add_argparser_arguments(subparser)
    parser.add_argument(
        "--version",
        action="version",
        version=f'%(prog)s {importlib.metadata.version("flerr")}'
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=Path("flerr.yaml"),
        help="path to scenario configuration file"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="set the logging level",
    )
    parser.add_argument(
        "--log-stderr",
        action="store_true",
        help="log to STDERR"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        metavar="FILE",
        help="log to file FILE"
    )
    parser.add_argument(
        "--log-syslog",
        nargs="?",
        const=True,
        default=False,
        metavar="ADDRESS",
        help=("enable syslog logging and "
              "optionally specify syslog address "
              "(default: /dev/log)"
        )
    )
    parsed_args = parser.parse_args(argv)

    try:
        scenarios = flerr.config.parse_config(parsed_args.config)
    except flerr.config.ConfigErrors as exc:
        for err in exc.errors:
            scenario, err_msg = err
            print(f"flerr: config error: {scenario}: {err_msg}", file=sys.stderr)
        return 1

    flerr.logging.init_logging(
        level=parsed_args.log_level,
        stderr=parsed_args.log_stderr,
        logfile=parsed_args.log_file,
        syslog=bool(parsed_args.log_syslog),
        syslog_address=parsed_args.log_syslog if isinstance(parsed_args.log_syslog, str) else "/dev/log"
    )

    try:
        return subcommand_name_class_map[parsed_args.subcommand]().main(scenarios, parsed_args)
    except Exception as exc:
        print(f"flerr: error: {exc}", file=sys.stderr)
        return 1
