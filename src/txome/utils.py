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

import os
import pathlib
import re

from .constants import DATA_PATH, DDL_FN

whitespace_re = re.compile(r'\s')

# IUPAC codes are complemented as well, case is preserved
dna_complement_tr_table = str.maketrans(
    'ACGTRYKMBVDHNacgtrykmbvdhn',
    'TGCAYRMKVBHDNtgcayrmkvbhdn')


def reverse_complement(seq: str) -> str:
    return seq[::-1].translate(dna_complement_tr_table)


def trim_to_first_space(s: str) -> str:
    return whitespace_re.split(s, 1)[0]


def get_data_file_path(fp):
    return os.path.join(pathlib.Path(__file__).parent.absolute(), DATA_PATH, fp)


def get_ddl_path() -> str:
    return get_data_file_path(DDL_FN)
