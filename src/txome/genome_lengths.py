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

from .sequences import SequenceCollection


def hash_genome_lengths(genome: SequenceCollection) -> dict[str, int]:
    """Map both the full and the trimmed header of each sequence to its length"""

    lengths: dict[str, int] = {}
    for seq in genome:
        lengths[seq.header] = len(seq)
        lengths[seq.name] = len(seq)
    return lengths
