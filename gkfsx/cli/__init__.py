# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
The ``gkfsx`` CLI stages data in and out of a GekkoFS deployment running in
the current Slurm allocation.

.. note:: When in doubt use ``gkfsx --help``.

Configuring
-----------------

.. code-block:: shell-session

 $ gkfsx configure
 $ vi .gkfsxconfig   # fill in the FIXME placeholders

Copying data
-----------------
Copies into the GekkoFS mount dir are stage-ins, copies out of it are
stage-outs. Exactly one of the two paths must be under the mount dir.

.. code-block:: shell-session

 $ gkfsx cp /lustre/bob/input /mnt/gkfs/input
 $ gkfsx cp /mnt/gkfs/output /lustre/bob/output

Add ``--dryrun`` to print the ``mpirun`` command instead of running it.

Inspecting the daemons
-----------------------

.. code-block:: shell-session

 $ gkfsx gen
 HOST    ENDPOINT                        PID
 ------  ------------------------------  -----
 node1   ofi+sockets://10.0.0.1:41423    12345
 node2   ofi+sockets://10.0.0.2:41423    PID not found

The command leaves ``gkfs_hosts.txt`` and ``gkfs_hosts.txt.pid`` in the
current working directory.
"""
