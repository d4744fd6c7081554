# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

import re
from typing import Iterable, List, Tuple, Union

_DIGITS = re.compile(r"(\d+)")


def version_key(data: str) -> Tuple[Union[str, int], ...]:
    """
    Returns a sort key that orders strings the way ``sort -V`` orders
    node names: runs of digits compare numerically, everything else
    compares as text. Hence ``node2`` sorts before ``node10``.

    ``re.split`` with a capturing group always alternates text and digit
    runs (starting and ending with a possibly empty text run) so two keys
    never compare a ``str`` against an ``int`` at the same position.
    """
    parts: List[Union[str, int]] = []
    for i, part in enumerate(_DIGITS.split(data)):
        parts.append(int(part) if i % 2 else part)
    return tuple(parts)


def version_sorted(data: Iterable[str]) -> List[str]:
    return sorted(data, key=version_key)
