#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

import logging
import os
import shutil

from gkfsx.config import StagingConfig
from gkfsx.specs import HOSTS_BACKUP_FILE, HOSTS_FILE
from gkfsx.util.strings import version_key

log: logging.Logger = logging.getLogger(__name__)


def normalize_hosts(cfg: StagingConfig, workdir: str) -> str:
    """
    Copies the GekkoFS hosts file into ``workdir`` as ``gkfs_hosts.txt.bak``
    and writes ``gkfs_hosts.txt`` with the same lines in version-aware order
    of the node names (``node2`` before ``node10``). Blank lines are dropped.
    Returns the path to the sorted hosts file.

    A failed backup is only logged; the lines are then read straight from
    the configured hosts file.

    Raises:
        OSError: if the configured hosts file cannot be read
    """
    log.info("processing gekkofs hosts file...")
    backup = os.path.join(workdir, HOSTS_BACKUP_FILE)
    source = cfg.hosts_file
    try:
        shutil.copyfile(cfg.hosts_file, backup)
        source = backup
    except OSError as e:
        log.warning(f"could not back up `{cfg.hosts_file}` to `{backup}`: {e}")

    with open(source, "r") as f:
        lines = [line.strip() for line in f if line.strip()]

    hosts_file = os.path.join(workdir, HOSTS_FILE)
    with open(hosts_file, "w") as f:
        for line in sorted(lines, key=version_key):
            f.write(f"{line}\n")
    log.info(f"wrote {len(lines)} host(s) to {hosts_file}")
    return hosts_file
