#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

"""
Resolves which node of the allocation runs a GekkoFS daemon on which port
and under which pid.

The GekkoFS daemons pick their port at start-up and record
``<node> <uri>`` in the shared hosts file. A single probe command is fanned
out to every node with ``clush``; on each node it looks up its own line in
the (sorted) hosts file, asks ``lsof`` which process listens on that port and
appends one :py:class:`gkfsx.specs.HostRecord` line to a shared partial file
in the working directory. The orchestrator then sorts the partial file into
the final topology map (``gkfs_hosts.txt.pid``) read by the data movers.

Nodes that do not answer (missing hosts file, no ``lsof``, no line for the
node) simply do not appear in the map. Only a failing ``clush`` invocation
or a missing/unreadable partial file is fatal.
"""

import logging
import os
import shlex
from typing import List

from gkfsx.cluster import Cluster
from gkfsx.config import StagingConfig
from gkfsx.specs import (
    HOSTS_FILE,
    PID_NOT_FOUND,
    TOPOLOGY_BACKUP_FILE,
    TOPOLOGY_FILE,
    TopologyMap,
)

log: logging.Logger = logging.getLogger(__name__)

PROBE_MISSING_MSG = "required gekkofs hosts file or commands are missing"


def probe_script(hosts_file: str, partial_file: str) -> str:
    """
    Returns the shell command run once on every node. Record lines are
    appended to ``partial_file``; diagnostics go to stderr.
    """
    hosts = shlex.quote(hosts_file)
    partial = shlex.quote(partial_file)
    return (
        f"if [ -f {hosts} ] && [ -f /etc/hostname ] && command -v lsof > /dev/null; then"
        f" me=$(cat /etc/hostname);"
        f" awk -v me=\"$me\" '$1 == me {{print $1, $2}}' {hosts} |"
        f" while read -r host url; do"
        f" port=${{url##*:}};"
        f" pid=$(lsof -t -i :$port 2>/dev/null | head -n 1);"
        f' echo "$host: $url:${{pid:-{PID_NOT_FOUND}}}" >> {partial};'
        f" done;"
        f' else echo "$(hostname): {PROBE_MISSING_MSG}";'
        f" fi 1>&2"
    )


def _remove_stale(paths: List[str]) -> None:
    for path in paths:
        try:
            os.remove(path)
            log.debug(f"removed stale {path}")
        except FileNotFoundError:
            pass


def resolve_topology(cfg: StagingConfig, cluster: Cluster, workdir: str) -> TopologyMap:
    """
    Probes every allocated node and writes the sorted topology map to
    ``<workdir>/gkfs_hosts.txt.pid``. Expects :py:func:`normalize_hosts`
    to have written ``<workdir>/gkfs_hosts.txt`` already.

    Raises:
        SubprocessError: if the fan-out command fails
        TopologyFileError: if no partial topology file was produced or it
            cannot be read
    """
    partial_file = os.path.join(workdir, TOPOLOGY_BACKUP_FILE)
    topology_file = os.path.join(workdir, TOPOLOGY_FILE)
    _remove_stale([partial_file, topology_file])

    nodes = cluster.nodes()
    job = cluster.fanout(
        nodes, probe_script(os.path.join(workdir, HOSTS_FILE), partial_file)
    )
    for line in job.stderr.splitlines():
        if PROBE_MISSING_MSG in line:
            log.warning(line)

    topology = TopologyMap.read(partial_file)
    topology.write(topology_file)

    if len(topology) < len(nodes):
        missing = sorted(set(nodes) - set(topology.hosts))
        log.warning(
            f"only {len(topology)} of {len(nodes)} node(s) reported a gekkofs daemon,"
            f" missing: {','.join(missing)}"
        )
    for record in topology:
        if not record.has_pid:
            log.warning(f"no process listens on the gekkofs port of {record.host}")

    log.info(f"wrote topology of {len(topology)} node(s) to {topology_file}")
    return topology
