# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

import argparse
import logging
import sys

from gkfsx.cli.cmd_base import SubCommand
from gkfsx.cluster import create_cluster
from gkfsx.config import load_config
from gkfsx.specs import GkfsxError

logger: logging.Logger = logging.getLogger(__name__)


class CmdNodes(SubCommand):
    """print the nodes of the current allocation (environment check)"""

    def add_arguments(self, subparser: argparse.ArgumentParser) -> None:
        pass

    def run(self, args: argparse.Namespace) -> None:
        try:
            nodes = create_cluster(load_config()).nodes()
        except (GkfsxError, OSError) as e:
            logger.error(f"failed to list the allocated nodes: {e}")
            sys.exit(1)
        print(",".join(nodes), len(nodes))
