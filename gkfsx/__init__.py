#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
``gkfsx`` stages data between a GekkoFS burst buffer and the global
filesystem of an HPC job allocation.

The package is layered as follows:

#. :py:mod:`gkfsx.specs` - the data model (host records, topology maps,
   launch specs) and the error types.
#. :py:mod:`gkfsx.cluster` - thin wrappers around the cluster tools
   (``srun``, ``clush``, ``mpirun``) that run work on every node.
#. :py:mod:`gkfsx.staging` - discovery of the per-node daemons and the
   stage-in/stage-out orchestration.
#. :py:mod:`gkfsx.cli` - the ``gkfsx`` command line tool.
"""

from .version import __version__ as __version__  # noqa: F401
