# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

import abc
import argparse


class SubCommand(abc.ABC):
    """
    A ``gkfsx <name>`` sub command. Instances are registered by name in
    :py:func:`gkfsx.cli.main.get_sub_cmds` and the class docstring doubles as
    the one-line help shown by ``gkfsx --help``.
    """

    @abc.abstractmethod
    def add_arguments(self, subparser: argparse.ArgumentParser) -> None:
        """
        Adds the sub command's own arguments (the global ``--log_level``
        belongs to the top-level parser).
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def run(self, args: argparse.Namespace) -> None:
        """
        Runs the sub command. Fatal errors are logged and end the process
        with ``sys.exit(1)``.
        """
        raise NotImplementedError()
