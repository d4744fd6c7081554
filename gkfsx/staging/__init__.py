#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

"""
Stage-in and stage-out of data between GekkoFS and the global filesystem.

.. code-block:: python

 from gkfsx.cluster import create_cluster
 from gkfsx.config import load_config
 from gkfsx.staging import copy

 cfg = load_config()
 print(copy("/lustre/bob/input", "/mnt/gkfs/input", cfg, create_cluster(cfg)))

"""

from gkfsx.staging.director import copy, generate_hosts  # noqa: F401
from gkfsx.staging.hosts import normalize_hosts  # noqa: F401
from gkfsx.staging.launch import build_launch_spec, launch  # noqa: F401
from gkfsx.staging.paths import classify  # noqa: F401
from gkfsx.staging.topology import resolve_topology  # noqa: F401
