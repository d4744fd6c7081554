# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

import argparse
import logging
import sys

from gkfsx.cli.cmd_base import SubCommand
from gkfsx.cli.colors import ENDC, GREEN
from gkfsx.cluster import create_cluster
from gkfsx.config import load_config
from gkfsx.specs import GkfsxError
from gkfsx.staging import copy

logger: logging.Logger = logging.getLogger(__name__)


class CmdCp(SubCommand):
    """copy files from the global filesystem to gekkofs, or from gekkofs to the global filesystem"""

    def add_arguments(self, subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "src",
            type=str,
            help="source path",
        )
        subparser.add_argument(
            "dst",
            type=str,
            help="destination path, exactly one of src and dst must be under the gekkofs mount dir",
        )
        subparser.add_argument(
            "--dryrun",
            action="store_true",
            default=False,
            help="refresh the topology but only print the mpirun command instead of running it",
        )

    def run(self, args: argparse.Namespace) -> None:
        try:
            cfg = load_config()
            result = copy(
                args.src, args.dst, cfg, create_cluster(cfg), dryrun=args.dryrun
            )
        except (GkfsxError, OSError) as e:
            logger.error(f"failed to copy `{args.src}` to `{args.dst}`: {e}")
            sys.exit(1)

        if args.dryrun:
            print(f"=== LAUNCH REQUEST ===\n{result}")
        else:
            print(result)
            logger.info(f"{GREEN}copied `{args.src}` to `{args.dst}`{ENDC}")
