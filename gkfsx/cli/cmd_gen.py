# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

import argparse
import logging
import sys

from tabulate import tabulate

from gkfsx.cli.cmd_base import SubCommand
from gkfsx.cluster import create_cluster
from gkfsx.config import load_config
from gkfsx.specs import GkfsxError
from gkfsx.staging import generate_hosts

logger: logging.Logger = logging.getLogger(__name__)


HOST_HEADER = "HOST"
ENDPOINT_HEADER = "ENDPOINT"
PID_HEADER = "PID"


class CmdGen(SubCommand):
    """generate the sorted gekkofs hosts file and the daemon topology map"""

    def add_arguments(self, subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--quiet",
            action="store_true",
            default=False,
            help="do not print the resolved topology",
        )

    def run(self, args: argparse.Namespace) -> None:
        try:
            cfg = load_config()
            topology = generate_hosts(cfg, create_cluster(cfg))
        except (GkfsxError, OSError) as e:
            logger.error(f"failed to generate the gekkofs hosts files: {e}")
            sys.exit(1)

        if not args.quiet:
            rows = [[r.host, r.endpoint, r.pid] for r in topology]
            print(tabulate(rows, headers=[HOST_HEADER, ENDPOINT_HEADER, PID_HEADER]))
