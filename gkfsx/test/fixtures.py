# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

"""
Useful test fixtures (classes that you can subclass your python ``unittest.TestCase``)
"""

import os
import shutil
import tempfile
import unittest
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from gkfsx.cluster import Cluster, ClusterJob
from gkfsx.config import StagingConfig
from gkfsx.specs import HostRecord, LaunchSpec, TOPOLOGY_BACKUP_FILE


class TestWithTmpDir(unittest.TestCase):
    """
    A test fixture that creates and destroys (deletes) a temporary test directory for each
    test case by implementing a ``setUp()`` and ``tearDown()`` method. The temporary directory
    is made available via ``self.tmpdir`` parameter and is only valid for the duration of test case
    (not the whole test class).

    Usage:

    .. code-block:: python

     from gkfsx.test.fixtures import TestWithTmpDir

     class MyTest(TestWithTmpDir):

        def test_foo(self) -> None:
            self.tmpdir
    """

    def setUp(self) -> None:
        self.tmpdir: Path = Path(
            tempfile.mkdtemp(prefix=f"gkfsx-{self.__class__.__name__}-")
        )

    def tearDown(self) -> None:
        shutil.rmtree(self.tmpdir)

    def touch(self, filepath: str) -> Path:
        """
        Creates an empty file with the given name (equivalent to UNIX "touch") in the test's tmpdir
        returns a ``Path`` to the created file. The ``filepath`` can be a file name or a relative path.
        """

        f = self.tmpdir / filepath
        f.parent.mkdir(parents=True, exist_ok=True)

        f.touch()
        return f

    def write(self, filepath: str, content: Iterable[str]) -> Path:
        """
        Creates a file given the filepath (can be a file name or a relative path) in the test's tmpdir
        and writes the given content line-by-line into the file. Returns the filepath to the written file.

        Usage:

        .. code-block:: python

         self.write("foo.txt", content=["hello\\n", "world\\n"])

        """

        f = self.touch(filepath)
        with open(f, "w") as fout:
            fout.writelines(content)
        return f

    def read(self, filepath: Union[str, Path]) -> List[str]:
        """
        Reads the entire contents of the file into a list.
        The ``filepath`` is assumed to be relative to the test tmpdir
        """

        with open(self.tmpdir / filepath, "r") as fin:
            return fin.readlines()

    def staging_config(self, **overrides: object) -> StagingConfig:
        """
        Returns a config whose hosts file is ``self.tmpdir / "gkfs_hosts_src.txt"``
        and whose mount dir is ``/mnt/gkfs``.
        """
        values: Dict[str, object] = {
            "hosts_file": str(self.tmpdir / "gkfs_hosts_src.txt"),
            "data_dir": "/lustre/gkfs_data",
            "ld_preload_file": "/opt/gkfs/lib64/libgkfs_intercept.so",
            "mount_dir": "/mnt/gkfs",
            "clush_conf": "/etc/clustershell/clush.conf",
            "lock_timeout": 1.0,
        }
        values.update(overrides)
        # pyre-ignore[6]
        return StagingConfig(**values)


class FakeCluster(Cluster):
    """
    In-process stand-in for the Slurm cluster. The fan-out does not run the
    probe script, it appends the given ``records`` to the partial topology
    file in ``workdir`` (as the nodes would) and the launch only records the
    request.
    """

    def __init__(
        self,
        nodes: List[str],
        workdir: str,
        records: Optional[List[HostRecord]] = None,
        launch_stdout: str = "",
    ) -> None:
        self._nodes = nodes
        self.workdir = workdir
        self.records: List[HostRecord] = records or []
        self.launch_stdout = launch_stdout
        self.fanout_commands: List[str] = []
        self.launched: List[LaunchSpec] = []

    def nodes(self) -> List[str]:
        return list(self._nodes)

    def fanout(self, nodes: List[str], command: str) -> ClusterJob:
        self.fanout_commands.append(command)
        if self.records:
            with open(os.path.join(self.workdir, TOPOLOGY_BACKUP_FILE), "a") as f:
                for record in self.records:
                    f.write(f"{record}\n")
        job = ClusterJob(["clush", "-w", ",".join(nodes), command])
        job.returncode = 0
        return job

    def launch(self, spec: LaunchSpec) -> ClusterJob:
        self.launched.append(spec)
        job = ClusterJob(spec.materialize())
        job.returncode = 0
        job.stdout = self.launch_stdout
        return job
