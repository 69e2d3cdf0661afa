########## LICENCE ##########
# txome
# Copyright (C) 2024 Genome Research Ltd
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
#############################

from __future__ import annotations

import logging

from charset_normalizer import detect

from ..uint_range import UIntRange


def detect_encoding(fp: str) -> str | None:
    with open(fp, 'rb') as rfh:
        encoding = detect(rfh.read(10000))['encoding']
    logging.debug("File '%s' encoding: %s." % (fp, encoding))

    # Only the head of the file is sampled
    return 'utf-8' if encoding == 'ascii' else encoding


def parse_uint_range(start: str, end: str) -> UIntRange:
    return UIntRange(int(start), int(end))


def parse_uint_range_from_list(a: list[str], start_field: int, end_field: int) -> UIntRange:
    return parse_uint_range(a[start_field], a[end_field])
