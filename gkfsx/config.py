#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
gkfsx reads the locations of the GekkoFS deployment from a ``.gkfsxconfig``
file in INI format. The file is looked up in ``$HOME`` and in the current
working directory, or exclusively at the path given by the ``GKFSXCONFIG``
environment variable.

.. code-block:: ini

 [gekkofs]
 hosts_file = /home/bob/gkfs/gkfs_hosts.txt
 data_dir = /lustre/bob/gkfs_data
 ld_preload_file = /opt/gkfs/lib64/libgkfs_intercept.so
 mount_dir = /mnt/gkfs

 [clush]
 conf = /etc/clustershell/clush.conf

 [staging]
 bin_dir = /opt/gkfs/bin
 lock_timeout = 60

Run ``gkfsx configure`` to drop a template with ``#FIXME`` placeholders for
the required keys into the current working directory.

When more than one config file is found, keys from the file found first
(``$HOME`` before CWD) take precedence and later files only add the keys
that are still missing.
"""

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, TextIO, Type

from gkfsx.specs import ConfigurationError

CONFIG_FILE = ".gkfsxconfig"
ENV_GKFSXCONFIG = "GKFSXCONFIG"
DEFAULT_CONFIG_DIRS = [str(Path.home()), str(Path.cwd())]
DEFAULT_LOCK_TIMEOUT = 60.0

log: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _opt:
    section: str
    key: str
    attr: str
    help: str
    opt_type: Type[object] = str
    required: bool = True
    default: Optional[object] = None

    @property
    def name(self) -> str:
        return f"{self.section}.{self.key}"


_OPTS: List[_opt] = [
    _opt(
        "gekkofs",
        "hosts_file",
        "hosts_file",
        "hosts file written by the GekkoFS daemons",
    ),
    _opt(
        "gekkofs",
        "data_dir",
        "data_dir",
        "GekkoFS data directory on the global filesystem",
    ),
    _opt(
        "gekkofs",
        "ld_preload_file",
        "ld_preload_file",
        "GekkoFS client interception library",
    ),
    _opt(
        "gekkofs",
        "mount_dir",
        "mount_dir",
        "mount point of GekkoFS on the compute nodes",
    ),
    _opt(
        "clush",
        "conf",
        "clush_conf",
        "clush configuration file used for the node probe",
    ),
    _opt(
        "staging",
        "bin_dir",
        "bin_dir",
        "directory holding the stage-in/stage-out executables (default: CWD)",
        required=False,
    ),
    _opt(
        "staging",
        "lock_timeout",
        "lock_timeout",
        "seconds to wait for the working directory lock",
        opt_type=float,
        required=False,
        default=DEFAULT_LOCK_TIMEOUT,
    ),
]


@dataclass(frozen=True)
class StagingConfig:
    """
    The configuration of one gkfsx invocation. Read once at start-up and
    passed explicitly to every staging step.
    """

    hosts_file: str
    data_dir: str
    ld_preload_file: str
    mount_dir: str
    clush_conf: str
    bin_dir: Optional[str] = None
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT


def _configparser() -> configparser.ConfigParser:
    config = configparser.ConfigParser(
        inline_comment_prefixes=(";", "#"), interpolation=None
    )
    # keep keys case-sensitive (configparser lowercases them by default)
    # pyre-ignore[8]
    config.optionxform = lambda option: option
    return config


def find_configs(dirs: Optional[Iterable[str]] = None) -> List[str]:
    """
    Finds and returns the filepaths to ``.gkfsxconfig`` files:

    1. If the environment variable ``GKFSXCONFIG`` is set, its value is
       returned in a single-element list and ``dirs`` is NOT searched.
    2. Otherwise ``.gkfsxconfig`` is looked for in each of ``dirs``
       (``[$HOME, $CWD]`` if not specified) and the existing ones are returned.
    """

    config = os.getenv(ENV_GKFSXCONFIG)
    if config is not None:
        configfile = Path(config)
        if not configfile.is_file():
            raise ConfigurationError(
                f"`{ENV_GKFSXCONFIG}={config}` does not exist or is not a file."
            )
        return [str(configfile)]

    config_files = []
    if not dirs:
        dirs = DEFAULT_CONFIG_DIRS
    for d in dirs:
        configfile = Path(d) / CONFIG_FILE
        if configfile.exists() and str(configfile) not in config_files:
            config_files.append(str(configfile))
    return config_files


def load(f: TextIO, values: Dict[str, str]) -> None:
    """
    Loads the known keys from the INI file ``f`` into ``values`` (keyed by
    ``section.key``), only adding keys that are NOT already in ``values``.
    Unknown keys are logged and skipped.
    """
    config = _configparser()
    config.read_file(f)

    known = {opt.name for opt in _OPTS}
    for section in config.sections():
        for key, value in config.items(section):
            name = f"{section}.{key}"
            if name not in known:
                log.warning(
                    f"`{key} = {value}` in the [{section}] section of the config file"
                    " is not a gkfsx config key. Remove it to no longer see this warning"
                )
                continue
            values.setdefault(name, value)


def from_values(values: Dict[str, str]) -> StagingConfig:
    """
    Builds a :py:class:`StagingConfig` from the raw ``section.key`` values.

    Raises:
        ConfigurationError: if any required key is missing (all of the missing
            keys are reported at once) or a value has the wrong type
    """
    missing = [
        opt.name for opt in _OPTS if opt.required and not values.get(opt.name)
    ]
    if missing:
        raise ConfigurationError(
            f"missing required config key(s): {', '.join(missing)}."
            f" Run `gkfsx configure` to create a `{CONFIG_FILE}` template"
        )

    kwargs: Dict[str, object] = {}
    for opt in _OPTS:
        raw = values.get(opt.name)
        if not raw:
            kwargs[opt.attr] = opt.default
            continue
        try:
            # pyre-ignore[29]
            kwargs[opt.attr] = opt.opt_type(raw)
        except ValueError as e:
            raise ConfigurationError(
                f"`{opt.name} = {raw}` is not a valid {opt.opt_type.__name__}"
            ) from e

    # pyre-ignore[6]
    return StagingConfig(**kwargs)


def load_config(dirs: Optional[List[str]] = None) -> StagingConfig:
    """
    Finds the ``.gkfsxconfig`` files (see :py:func:`find_configs`) and
    loads them into a :py:class:`StagingConfig`.
    """
    values: Dict[str, str] = {}
    for configfile in find_configs(dirs):
        with open(configfile, "r") as f:
            load(f, values)
        log.info(f"loaded configs from {configfile}")
    return from_values(values)


def dump(f: TextIO, required_only: bool = False) -> None:
    """
    Dumps an INI-style config template into ``f``. Required keys are set
    with a ``#FIXME`` placeholder, optional keys with their default value
    (skipped if ``required_only=True``).
    """
    config = _configparser()
    for opt in _OPTS:
        if opt.required:
            val = f"#FIXME:({opt.opt_type.__name__}) {opt.help}"
        elif required_only:
            continue
        else:
            val = "" if opt.default is None else f"{opt.default}"

        if not config.has_section(opt.section):
            config.add_section(opt.section)
        config.set(opt.section, opt.key, val)
    config.write(f, space_around_delimiters=True)
