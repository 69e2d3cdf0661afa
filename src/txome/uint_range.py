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
from typing import Sized, Generic, TypeVar


UIntRangeT = TypeVar('UIntRangeT', bound='UIntRange')


@dataclass(slots=True, frozen=True)
class UIntRange(Sized):
    """
    One-based closed interval

    Inverted ranges (end before start) are representable and empty, so that
    annotation records can be carried as found and discarded downstream.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < 0:
            raise ValueError(f"Invalid range [{self.start}, {self.end}]!")

    def __len__(self) -> int:
        return max(0, self.end - self.start + 1)

    def __lt__(self, other) -> bool:
        return (
            self.end < other.end if self.start == other.start else
            self.start < other.start
        )

    def __repr__(self) -> str:
        return f"[{self.start}, {self.end}]"

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    @property
    def positions(self) -> list[int]:
        return list(range(self.start, self.end + 1))

    def to_tuple(self) -> tuple[int, int]:
        return self.start, self.end


class UIntRangeSortedList(list, Generic[UIntRangeT]):

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.sort_by_start()

    def sort_by_start(self) -> None:
        # Stable: ties keep their insertion order
        self.sort(key=lambda r: r.start)
