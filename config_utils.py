# Copyright 2023 Andrew Holliday
#
# This file is part of the Transit Learning project.
#
# Transit Learning is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the Free
# Software Foundation, either version 3 of the License, or (at your option) any
# later version.
#
# Transit Learning is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more
# details.
#
# You should have received a copy of the GNU General Public License along with
# Transit Learning. If not, see <https://www.gnu.org/licenses/>.

import logging
import re

from omegaconf import DictConfig, OmegaConf


LOG_FORMAT = '%(asctime)s %(levelname)s %(message)s'

INT_PATTERN = re.compile(r'[+-]?[0-9]+')


def sanitize_text(text):
    """Names and other free-text fields are stored on a single line, so any
    newlines or carriage returns are dropped.  None becomes the empty
    string."""
    if text is None:
        return ''
    return text.replace('\n', '').replace('\r', '')


def parse_int(int_str):
    """Parse a base-10 integer field, tolerating surrounding whitespace.

    Unlike int(), this rejects digit separators and non-ascii digits, which
    never appear in our encoded formats.  Raises ValueError on failure."""
    stripped = int_str.strip()
    if not INT_PATTERN.fullmatch(stripped):
        raise ValueError('not an integer: {!r}'.format(int_str))
    return int(stripped)


# utility functions for working with our own configuration files

def load_config(config_path):
    return OmegaConf.load(str(config_path))


def configure_logging(cfg: DictConfig):
    level = cfg.get('log_level', 'INFO')
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(format=LOG_FORMAT, level=level)
    # basicConfig does nothing if hydra already set up handlers
    logging.getLogger().setLevel(level)
