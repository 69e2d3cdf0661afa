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
from typing import Sized

from .constants import TRANSCRIPT_KEY_SEPARATOR
from .exon import Exon
from .strings.strand import Strand
from .uint_range import UIntRangeSortedList


def get_transcript_key(transcript_id: str, contig: str) -> str:
    # The same identifier may appear on more than one contig in faulty annotations
    return f"{transcript_id}{TRANSCRIPT_KEY_SEPARATOR}{contig}"


@dataclass(slots=True, frozen=True)
class TranscriptInfo:
    key: str
    transcript_id: str
    contig: str
    strand: Strand


@dataclass
class ExonAnnotation(Sized):
    """
    Exons grouped by transcript and transcripts grouped by contig

    Transcripts are identified by their contig-qualified key; the contig and
    strand of a transcript are those of the first exon record found for it.
    """

    contig_transcripts: dict[str, list[TranscriptInfo]] = field(default_factory=dict)
    transcripts: dict[str, TranscriptInfo] = field(default_factory=dict)
    transcript_exons: dict[str, UIntRangeSortedList[Exon]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.transcripts)

    @property
    def contigs(self) -> list[str]:
        return list(self.contig_transcripts.keys())

    def add_exon(self, transcript_id: str, contig: str, strand: Strand, exon: Exon) -> str:
        key = get_transcript_key(transcript_id, contig)

        exons = self.transcript_exons.get(key)
        if exons is None:
            info = TranscriptInfo(key, transcript_id, contig, strand)
            self.contig_transcripts.setdefault(contig, []).append(info)
            self.transcripts[key] = info
            exons = self.transcript_exons[key] = UIntRangeSortedList()

        exons.append(exon)
        return key

    def sort_exons(self) -> None:
        for exons in self.transcript_exons.values():
            exons.sort_by_start()

    def get_contig_transcripts(self, contig: str) -> list[TranscriptInfo]:
        return self.contig_transcripts.get(contig, [])

    def get_exons(self, key: str) -> UIntRangeSortedList[Exon] | None:
        return self.transcript_exons.get(key)
