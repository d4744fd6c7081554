#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

import logging
import os
from typing import Optional, Union

import filelock

from gkfsx.cluster import Cluster
from gkfsx.config import StagingConfig
from gkfsx.specs import DryRunInfo, LaunchSpec, LOCK_FILE, TopologyMap
from gkfsx.staging.hosts import normalize_hosts
from gkfsx.staging.launch import launch, launch_dryrun
from gkfsx.staging.paths import classify
from gkfsx.staging.topology import resolve_topology

log: logging.Logger = logging.getLogger(__name__)


def workdir_lock(cfg: StagingConfig, workdir: str) -> filelock.FileLock:
    """
    Returns the advisory lock that serializes gkfsx invocations sharing
    ``workdir`` (they would otherwise overwrite each other's hosts and
    topology files).
    """
    return filelock.FileLock(
        os.path.join(workdir, LOCK_FILE), timeout=cfg.lock_timeout
    )


def _generate_hosts(cfg: StagingConfig, cluster: Cluster, workdir: str) -> TopologyMap:
    normalize_hosts(cfg, workdir)
    return resolve_topology(cfg, cluster, workdir)


def generate_hosts(
    cfg: StagingConfig, cluster: Cluster, workdir: Optional[str] = None
) -> TopologyMap:
    """
    Writes a fresh sorted hosts file and topology map into ``workdir``
    (defaults to CWD) and returns the topology map.
    """
    workdir = workdir or os.getcwd()
    with workdir_lock(cfg, workdir):
        return _generate_hosts(cfg, cluster, workdir)


def copy(
    src: str,
    dst: str,
    cfg: StagingConfig,
    cluster: Cluster,
    workdir: Optional[str] = None,
    dryrun: bool = False,
) -> Union[str, DryRunInfo[LaunchSpec]]:
    """
    Copies ``src`` to ``dst`` between GekkoFS and the global filesystem:

    1. regenerates the hosts file and topology map (regardless of direction),
    2. classifies the copy as stage-in or stage-out from the mount dir,
    3. launches the matching mover on every allocated node with ``src`` and
       ``dst`` in that positional order.

    Any failure in 1. or 2. raises before anything is launched. With
    ``dryrun=True`` step 3. returns the launch request instead of running it.
    Otherwise returns the captured stdout of the movers.
    """
    workdir = workdir or os.getcwd()
    with workdir_lock(cfg, workdir):
        _generate_hosts(cfg, cluster, workdir)
        direction = classify(src, dst, cfg.mount_dir)
        log.info(f"`{src}` -> `{dst}` is a {direction}")
        if dryrun:
            return launch_dryrun(cfg, cluster, direction, src, dst, workdir)
        return launch(cfg, cluster, direction, src, dst, workdir)
