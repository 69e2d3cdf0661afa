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

from typing import Mapping, Sequence

from .uint_range import UIntRange


def merge_exons(exons: Sequence[UIntRange]) -> list[UIntRange]:
    """
    Merge overlapping ranges, sorted by start position, into spanning regions
    """

    if not exons:
        return []

    regions: list[UIntRange] = []
    start, end = exons[0].to_tuple()

    for exon in exons[1:]:
        if exon.start <= end:
            end = max(end, exon.end)
        else:
            regions.append(UIntRange(start, end))
            start, end = exon.to_tuple()

    last = UIntRange(start, end)
    if not regions or regions[-1] != last:
        regions.append(last)

    return regions


def make_regions(transcript_exons: Mapping[str, Sequence[UIntRange]]) -> dict[str, list[UIntRange]]:
    return {
        key: merge_exons(exons)
        for key, exons in transcript_exons.items()
        if exons
    }
