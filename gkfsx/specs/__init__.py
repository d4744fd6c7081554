#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

"""
This contains the gkfsx data model: the records exchanged between the node
probe and the data movers through the working directory, the launch request
handed to the MPI launcher, and the errors raised along the way.
"""

from gkfsx.specs.api import (  # noqa: F401 F403
    ConfigurationError,
    DryRunInfo,
    GkfsxError,
    HOSTS_BACKUP_FILE,
    HOSTS_FILE,
    HostRecord,
    LaunchSpec,
    LOCK_FILE,
    MalformedRecordError,
    PID_NOT_FOUND,
    SubprocessError,
    TOPOLOGY_BACKUP_FILE,
    TOPOLOGY_FILE,
    TopologyFileError,
    TopologyMap,
    TransferDirection,
)
