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

from dataclasses import dataclass

from .uint_range import UIntRange


@dataclass(slots=True, frozen=True)
class Exon(UIntRange):

    @classmethod
    def from_range(cls, r: UIntRange) -> Exon:
        return cls(r.start, r.end)

    def get_seq(self, seq: str) -> str:
        """
        Fetch the exonic bases from a whole chromosome sequence

        Positions beyond either end of the sequence contribute no bases, and
        neither does an inverted exon.
        """

        return seq[max(self.start, 1) - 1:self.end]
