#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

from gkfsx.cluster.api import Cluster, ClusterJob  # noqa: F401
from gkfsx.cluster.slurm import SlurmCluster  # noqa: F401
from gkfsx.config import StagingConfig


def create_cluster(cfg: StagingConfig) -> Cluster:
    return SlurmCluster(clush_conf=cfg.clush_conf)
