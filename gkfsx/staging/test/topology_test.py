#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

import os
import unittest
from unittest.mock import MagicMock

from gkfsx.cluster import ClusterJob
from gkfsx.specs import (
    HostRecord,
    PID_NOT_FOUND,
    SubprocessError,
    TopologyFileError,
    TopologyMap,
)
from gkfsx.staging.topology import probe_script, PROBE_MISSING_MSG, resolve_topology
from gkfsx.test.fixtures import FakeCluster, TestWithTmpDir


def _local_hostname() -> str:
    try:
        with open("/etc/hostname") as f:
            return f.read().strip()
    except OSError:
        return ""


def _record(host: str, pid: str = "1000") -> HostRecord:
    return HostRecord(host, f"ofi+sockets://{host}:41423", pid)


class ProbeScriptTest(TestWithTmpDir):
    def test_probe_script(self) -> None:
        script = probe_script("/work dir/gkfs_hosts.txt", "/work dir/gkfs_hosts.txt.pid.bak")
        self.assertIn("[ -f '/work dir/gkfs_hosts.txt' ]", script)
        self.assertIn(">> '/work dir/gkfs_hosts.txt.pid.bak'", script)
        self.assertIn("command -v lsof", script)
        self.assertIn("${pid:-PID not found}", script)
        self.assertIn(PROBE_MISSING_MSG, script)

    def _run_probe(self, pid: str) -> ClusterJob:
        me = _local_hostname()
        self.write(
            "gkfs_hosts.txt",
            [f"{me} ofi+sockets://10.0.0.1:41423\n", "other ofi+sockets://10.0.0.2:5\n"],
        )
        lsof = self.write("bin/lsof", ["#!/bin/sh\n", f"[ -n '{pid}' ] && echo {pid}\n", "true\n"])
        os.chmod(lsof, 0o755)
        script = probe_script(
            str(self.tmpdir / "gkfs_hosts.txt"), str(self.tmpdir / "partial")
        )
        path = f"{self.tmpdir / 'bin'}:{os.environ.get('PATH', '')}"
        return ClusterJob(["sh", "-c", script], env={"PATH": path}).run()

    @unittest.skipUnless(_local_hostname(), "needs /etc/hostname")
    def test_probe_script_runs(self) -> None:
        self._run_probe("4242")
        lines = self.read("partial")
        self.assertEqual(1, len(lines))
        self.assertTrue(lines[0].endswith(": ofi+sockets://10.0.0.1:41423:4242\n"))

    @unittest.skipUnless(_local_hostname(), "needs /etc/hostname")
    def test_probe_script_no_pid(self) -> None:
        self._run_probe("")
        record = HostRecord.parse(self.read("partial")[0])
        self.assertEqual(PID_NOT_FOUND, record.pid)
        self.assertEqual("ofi+sockets://10.0.0.1:41423", record.endpoint)

    def test_probe_script_missing_hosts_file(self) -> None:
        script = probe_script(str(self.tmpdir / "nope"), str(self.tmpdir / "partial"))
        job = ClusterJob(["sh", "-c", script]).run()
        self.assertIn(PROBE_MISSING_MSG, job.stderr)
        self.assertFalse((self.tmpdir / "partial").exists())


class ResolveTopologyTest(TestWithTmpDir):
    def test_all_nodes_respond(self) -> None:
        nodes = ["node1", "node2", "node10"]
        cluster = FakeCluster(
            nodes, str(self.tmpdir), records=[_record(n) for n in reversed(nodes)]
        )
        topology = resolve_topology(self.staging_config(), cluster, str(self.tmpdir))

        self.assertEqual(nodes, topology.hosts)
        self.assertEqual(
            topology, TopologyMap.read(str(self.tmpdir / "gkfs_hosts.txt.pid"))
        )
        self.assertEqual(1, len(cluster.fanout_commands))
        self.assertIn(str(self.tmpdir / "gkfs_hosts.txt"), cluster.fanout_commands[0])

    def test_degraded_topology(self) -> None:
        nodes = ["node1", "node2", "node3", "node10"]
        cluster = FakeCluster(
            nodes,
            str(self.tmpdir),
            records=[_record("node10"), _record("node3"), _record("node1")],
        )
        with self.assertLogs("gkfsx.staging.topology", level="WARNING") as cm:
            topology = resolve_topology(self.staging_config(), cluster, str(self.tmpdir))

        self.assertEqual(["node1", "node3", "node10"], topology.hosts)
        self.assertTrue(any("node2" in line for line in cm.output))
        self.assertEqual(
            [
                "node1: ofi+sockets://node1:41423:1000\n",
                "node3: ofi+sockets://node3:41423:1000\n",
                "node10: ofi+sockets://node10:41423:1000\n",
            ],
            self.read("gkfs_hosts.txt.pid"),
        )

    def test_pid_not_found_is_kept(self) -> None:
        cluster = FakeCluster(
            ["node1"], str(self.tmpdir), records=[_record("node1", PID_NOT_FOUND)]
        )
        topology = resolve_topology(self.staging_config(), cluster, str(self.tmpdir))
        self.assertEqual(PID_NOT_FOUND, topology[0].pid)

    def test_stale_files_removed(self) -> None:
        self.write("gkfs_hosts.txt.pid.bak", [f"{_record('stale')}\n"])
        self.write("gkfs_hosts.txt.pid", [f"{_record('stale')}\n"])
        cluster = FakeCluster(["node1"], str(self.tmpdir), records=[_record("node1")])
        topology = resolve_topology(self.staging_config(), cluster, str(self.tmpdir))
        self.assertEqual(["node1"], topology.hosts)
        self.assertEqual(["node1"], TopologyMap.read(str(self.tmpdir / "gkfs_hosts.txt.pid")).hosts)

    def test_no_node_responds(self) -> None:
        self.write("gkfs_hosts.txt.pid", [f"{_record('stale')}\n"])
        cluster = FakeCluster(["node1", "node2"], str(self.tmpdir))
        with self.assertRaises(TopologyFileError):
            resolve_topology(self.staging_config(), cluster, str(self.tmpdir))
        # the stale map must not be left behind for a later launch
        self.assertFalse((self.tmpdir / "gkfs_hosts.txt.pid").exists())

    def test_fanout_failure(self) -> None:
        cluster = MagicMock()
        cluster.nodes.return_value = ["node1"]
        cluster.fanout.side_effect = SubprocessError(
            ["clush"], 255, stderr="clush: node1: exited with exit code 255"
        )
        with self.assertRaises(SubprocessError):
            resolve_topology(self.staging_config(), cluster, str(self.tmpdir))
