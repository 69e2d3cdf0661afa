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

from dataclasses import dataclass, field
from typing import Iterator, Sized, TextIO

from .constants import FASTA_LINE_WIDTH
from .utils import reverse_complement, trim_to_first_space


@dataclass(slots=True)
class SeqRecord(Sized):
    seq_id: int
    header: str
    data: str

    def __len__(self) -> int:
        return len(self.data)

    @property
    def name(self) -> str:
        return trim_to_first_space(self.header)

    def reverse_complement(self) -> None:
        self.data = reverse_complement(self.data)

    def write_fasta(self, fh: TextIO, line_width: int = FASTA_LINE_WIDTH) -> None:
        fh.write(f">{self.header}\n")
        for i in range(0, len(self.data), line_width):
            fh.write(self.data[i:i + line_width])
            fh.write('\n')


@dataclass
class SequenceCollection(Sized):
    seqs: list[SeqRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.seqs)

    def __iter__(self) -> Iterator[SeqRecord]:
        return iter(self.seqs)

    def __getitem__(self, i: int) -> SeqRecord:
        return self.seqs[i]

    def add(self, seq: SeqRecord) -> None:
        self.seqs.append(seq)

    def clear(self) -> None:
        self.seqs.clear()

    @property
    def headers(self) -> list[str]:
        return [s.header for s in self.seqs]

    def write_fasta(self, fp: str) -> None:
        with open(fp, 'w') as fh:
            for seq in self.seqs:
                seq.write_fasta(fh)
