#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

import logging
import os
from typing import List

from gkfsx.cluster import Cluster
from gkfsx.config import StagingConfig
from gkfsx.specs import DryRunInfo, LaunchSpec, TOPOLOGY_FILE, TransferDirection

log: logging.Logger = logging.getLogger(__name__)


def build_launch_spec(
    cfg: StagingConfig,
    direction: TransferDirection,
    src: str,
    dst: str,
    hosts: List[str],
    workdir: str,
) -> LaunchSpec:
    """
    Builds the launch of one ``stage-in`` or ``stage-out`` process per host.
    The movers run with the GekkoFS client library preloaded so that their
    file calls under the mount dir are served by the burst buffer, and are
    called as ``<src> <dst> <topology file> <data dir>``.
    """
    bin_dir = cfg.bin_dir or workdir
    return LaunchSpec(
        executable=os.path.join(bin_dir, direction.value),
        args=[src, dst, os.path.join(workdir, TOPOLOGY_FILE), cfg.data_dir],
        hosts=list(hosts),
        env={
            "LD_PRELOAD": cfg.ld_preload_file,
            "HOST_SIZE": str(len(hosts)),
        },
        ppn=1,
    )


def launch_dryrun(
    cfg: StagingConfig,
    cluster: Cluster,
    direction: TransferDirection,
    src: str,
    dst: str,
    workdir: str,
) -> DryRunInfo[LaunchSpec]:
    spec = build_launch_spec(cfg, direction, src, dst, cluster.nodes(), workdir)
    return DryRunInfo(spec, repr)


def launch(
    cfg: StagingConfig,
    cluster: Cluster,
    direction: TransferDirection,
    src: str,
    dst: str,
    workdir: str,
) -> str:
    """
    Runs the data movers on every allocated node and blocks until they
    finish. Returns the captured stdout of the launch.

    Raises:
        SubprocessError: if the launcher exits with a non-zero code, with the
            captured stderr attached verbatim
    """
    dryrun_info = launch_dryrun(cfg, cluster, direction, src, dst, workdir)
    log.info(f"launching {direction} on {len(dryrun_info.request.hosts)} node(s)")
    job = cluster.launch(dryrun_info.request)
    return job.stdout
