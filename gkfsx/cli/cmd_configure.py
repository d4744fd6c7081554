#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

import argparse
import logging
import sys

from gkfsx.cli.cmd_base import SubCommand
from gkfsx.config import CONFIG_FILE, dump


logger: logging.Logger = logging.getLogger(__name__)


class CmdConfigure(SubCommand):
    """write a .gkfsxconfig template into the current directory"""

    def add_arguments(self, subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--print",
            action="store_true",
            help="if specified, prints the config file to stdout instead of saving it to a file",
        )
        subparser.add_argument(
            "-a",
            "--all",
            action="store_true",
            help="if specified, includes required and optional keys (default only dumps required)",
        )

    def run(self, args: argparse.Namespace) -> None:
        required_only = not args.all

        if args.print:
            dump(f=sys.stdout, required_only=required_only)
        else:
            with open(CONFIG_FILE, "w") as f:
                dump(f=f, required_only=required_only)
            logger.info(f"wrote {CONFIG_FILE}, replace the FIXME placeholders")
