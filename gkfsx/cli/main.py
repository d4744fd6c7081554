# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

import logging
import os
import sys
from argparse import ArgumentParser
from typing import Dict, List

import gkfsx
from gkfsx.cli.cmd_base import SubCommand
from gkfsx.cli.cmd_configure import CmdConfigure
from gkfsx.cli.cmd_cp import CmdCp
from gkfsx.cli.cmd_gen import CmdGen
from gkfsx.cli.cmd_nodes import CmdNodes
from gkfsx.cli.colors import BLUE, ENDC, GRAY


sub_parser_description = """Use the following commands to stage data, e.g.:
gkfsx cp /lustre/bob/input /mnt/gkfs/input
"""


def get_sub_cmds() -> Dict[str, SubCommand]:
    return {
        "configure": CmdConfigure(),
        "cp": CmdCp(),
        "gen": CmdGen(),
        "nodes": CmdNodes(),
    }


def create_parser(subcmds: Dict[str, SubCommand]) -> ArgumentParser:
    """
    Helper function parsing the command line options.
    """

    parser = ArgumentParser(description="data transport tools for GekkoFS")
    parser.add_argument(
        "--log_level",
        type=str,
        help="Python logging log level",
        default=os.getenv("LOGLEVEL", "INFO"),
    )
    parser.add_argument(
        "--version",
        action="version",
        version="gkfsx-{version}".format(version=gkfsx.__version__),
    )
    subparser = parser.add_subparsers(
        title="sub-commands",
        description=sub_parser_description,
    )

    for subcmd_name, cmd in subcmds.items():
        cmd_parser = subparser.add_parser(subcmd_name, help=cmd.__doc__)
        cmd.add_arguments(cmd_parser)
        cmd_parser.set_defaults(func=cmd.run)

    return parser


def run_main(subcmds: Dict[str, SubCommand], argv: List[str] = sys.argv[1:]) -> None:
    parser = create_parser(subcmds)
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format=f"{BLUE}gkfsx{ENDC} {GRAY}%(asctime)s %(levelname)-8s{ENDC} %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if "func" not in args:
        parser.print_help()
        sys.exit(1)
    args.func(args)


def main(argv: List[str] = sys.argv[1:]) -> None:
    run_main(get_sub_cmds(), argv)


if __name__ == "__main__":
    main()
