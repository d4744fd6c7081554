#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

"""
This contains the cluster implementation for Slurm allocations. It expects
the following tools to be installed on the node gkfsx runs on (normally the
first node of the allocation, from within ``salloc`` or an ``sbatch``
script):

* ``srun`` to enumerate the allocated nodes,
* ``clush`` (ClusterShell) to fan the daemon probe out to the nodes,
* an MPICH/Intel MPI style ``mpirun`` (``-host``, ``-env``, ``-ppn``) to
  launch the data movers.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from gkfsx.cluster.api import Cluster, ClusterJob
from gkfsx.specs import LaunchSpec
from gkfsx.util.strings import version_sorted

log: logging.Logger = logging.getLogger(__name__)


class SlurmCluster(Cluster):
    """
    Runs the gkfsx delegated jobs inside the current Slurm allocation.

    The node list is queried once per instance with ``srun hostname`` (one
    line per task, so names are de-duplicated) and reused for both the probe
    and the launch so that both see the same allocation.
    """

    def __init__(self, clush_conf: str, mpirun: str = "mpirun") -> None:
        self.clush_conf = clush_conf
        self.mpirun = mpirun
        self._nodes: Optional[List[str]] = None

    def nodes(self) -> List[str]:
        if self._nodes is None:
            job = ClusterJob(["srun", "hostname"]).run()
            names = {line.strip() for line in job.stdout.splitlines() if line.strip()}
            self._nodes = version_sorted(names)
            log.info(f"allocation has {len(self._nodes)} node(s)")
        return list(self._nodes)

    def fanout(self, nodes: List[str], command: str) -> ClusterJob:
        cmd = [
            "clush",
            f"--conf={self.clush_conf}",
            "-b",
            "-w",
            ",".join(nodes),
            command,
        ]
        return ClusterJob(cmd).run()

    def launch(self, spec: LaunchSpec) -> ClusterJob:
        cmd = replace(spec, launcher=self.mpirun).materialize()
        return ClusterJob(cmd).run()
