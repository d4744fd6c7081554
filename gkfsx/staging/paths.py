#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

# pyre-strict

from gkfsx.specs import ConfigurationError, TransferDirection


def classify(src: str, dst: str, mount_root: str) -> TransferDirection:
    """
    Decides the direction of a copy from which of the two paths lies under
    the GekkoFS mount root (plain prefix test):

    =============  =============  ===========
    src in mount   dst in mount   direction
    =============  =============  ===========
    no             yes            STAGE_IN
    yes            no             STAGE_OUT
    yes            yes            error
    no             no             error
    =============  =============  ===========

    Raises:
        ConfigurationError: if the direction is ambiguous
    """
    if not mount_root:
        raise ConfigurationError("the GekkoFS mount directory is not configured")

    src_in_mount = src.startswith(mount_root)
    dst_in_mount = dst.startswith(mount_root)

    if dst_in_mount and not src_in_mount:
        return TransferDirection.STAGE_IN
    elif src_in_mount and not dst_in_mount:
        return TransferDirection.STAGE_OUT
    elif src_in_mount and dst_in_mount:
        raise ConfigurationError(
            f"both `{src}` and `{dst}` are under the GekkoFS mount path"
            f" `{mount_root}`, exactly one of them must be"
        )
    else:
        raise ConfigurationError(
            f"neither `{src}` nor `{dst}` is under the GekkoFS mount path"
            f" `{mount_root}`. The source or the destination path must include"
            " the mount path, or check the configured `gekkofs.mount_dir`"
        )
