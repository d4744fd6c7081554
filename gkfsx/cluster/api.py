#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

import abc
import logging
import os
import shlex
import subprocess
from typing import Dict, List, Mapping, Optional, Sequence

from gkfsx.specs import LaunchSpec, SubprocessError

log: logging.Logger = logging.getLogger(__name__)


class ClusterJob:
    """
    A command delegated to one of the cluster tools. The tool owns whatever
    parallelism happens on the nodes; from the caller's point of view the job
    is a single process that is submitted, awaited and whose output is
    captured in full.

    .. code-block:: python

     job = ClusterJob(["clush", "-b", "-w", "n1,n2", "hostname"]).submit()
     job.wait()
     print(job.stdout)

    """

    def __init__(
        self,
        cmd: Sequence[str],
        env: Optional[Mapping[str, str]] = None,
        cwd: Optional[str] = None,
    ) -> None:
        self.cmd: List[str] = list(cmd)
        self.env: Dict[str, str] = dict(env or {})
        self.cwd = cwd
        self.returncode: Optional[int] = None
        self.stdout: str = ""
        self.stderr: str = ""
        # pyre-fixme[24]: Generic type `subprocess.Popen` expects 1 type parameter.
        self._proc: Optional[subprocess.Popen] = None

    def submit(self) -> "ClusterJob":
        """
        Starts the command. Raises :py:class:`SubprocessError` if the
        executable cannot be started at all (e.g. not on ``PATH``).
        """
        # inherit the parent's env vars, overriding them with the job's own
        env = os.environ.copy()
        env.update(self.env)

        log.info(f"running: {shlex.join(self.cmd)}")
        try:
            self._proc = subprocess.Popen(
                self.cmd,
                env=env,
                cwd=self.cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise SubprocessError(self.cmd, None, stderr=str(e)) from e
        return self

    def wait(self, timeout: Optional[float] = None) -> int:
        """
        Blocks until the command exits and captures its stdout and stderr.
        Returns the exit code. On ``subprocess.TimeoutExpired`` the command is
        killed (its partial output is still captured) before re-raising.
        """
        proc = self._proc
        if proc is None:
            raise RuntimeError("job was not submitted, call `submit()` first")
        try:
            stdout, stderr = proc.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            log.warning(f"timed out after {timeout}s, killing: {shlex.join(self.cmd)}")
            proc.kill()
            stdout, stderr = proc.communicate()
            self.stdout = stdout or ""
            self.stderr = stderr or ""
            self.returncode = proc.returncode
            raise
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        self.returncode = proc.returncode
        return proc.returncode

    def check(self) -> "ClusterJob":
        """
        Raises :py:class:`SubprocessError` carrying the captured output if
        the job exited with a non-zero code.
        """
        if self.returncode != 0:
            raise SubprocessError(self.cmd, self.returncode, self.stdout, self.stderr)
        return self

    def run(self) -> "ClusterJob":
        """
        Shorthand for ``submit()``, ``wait()`` and ``check()``.
        """
        self.submit().wait()
        return self.check()


class Cluster(abc.ABC):
    """
    The capabilities gkfsx needs from the HPC cluster: the list of nodes in
    the current allocation, a way to run a shell command once on each of
    them and a way to launch an MPI program across them.
    """

    @abc.abstractmethod
    def nodes(self) -> List[str]:
        """
        Returns the names of the nodes allocated to the current job,
        unique and in version-aware order.
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def fanout(self, nodes: List[str], command: str) -> ClusterJob:
        """
        Runs the shell ``command`` once on every node in ``nodes`` and blocks
        until all of them are done. Raises :py:class:`SubprocessError` if the
        fan-out tool itself fails.
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def launch(self, spec: LaunchSpec) -> ClusterJob:
        """
        Launches ``spec`` and blocks until it exits. Raises
        :py:class:`SubprocessError` if the launcher exits with a non-zero code.
        """
        raise NotImplementedError()
