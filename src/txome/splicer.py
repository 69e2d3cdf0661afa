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

from itertools import count
import logging
from typing import Iterator, Sequence

from .annotation import ExonAnnotation, TranscriptInfo
from .exon import Exon
from .loaders.fasta import load_sequences
from .loaders.gtf import load_exon_annotation
from .sequences import SeqRecord, SequenceCollection


def splice_exons(seq: str, exons: Sequence[Exon]) -> str:
    """
    Concatenate the exonic bases of a contig in the order given

    Exons running off the contig are truncated, inverted ones are skipped.
    """

    return ''.join(exon.get_seq(seq) for exon in exons)


def splice_transcript(seq: SeqRecord, info: TranscriptInfo, exons: Sequence[Exon], seq_ids: Iterator[int]) -> SeqRecord | None:
    spliced = splice_exons(seq.data, exons)
    if not spliced:
        return None

    # Identifiers are only assigned to the transcripts actually emitted
    transcript = SeqRecord(next(seq_ids), info.key, spliced)
    if info.strand.is_minus:
        transcript.reverse_complement()

    return transcript


def make_transcripts(
    annotation: ExonAnnotation,
    genome: SequenceCollection,
    seq_ids: Iterator[int] | None = None
) -> SequenceCollection:
    """
    Build the spliced sequences of all annotated transcripts

    Transcripts are generated following the order of the contigs in the genome
    and then the order of the transcripts in the annotation. Minus strand
    transcripts are reverse complemented. Sequence identifiers are drawn from
    `seq_ids`, counting from one by default.
    """

    ids = seq_ids if seq_ids is not None else count(1)
    transcripts = SequenceCollection()
    dropped_n: int = 0

    for seq in genome:
        for info in annotation.get_contig_transcripts(seq.name):
            exons = annotation.get_exons(info.key)
            if exons is None:
                continue

            transcript = splice_transcript(seq, info, exons, ids)
            if transcript is None:
                logging.debug("Transcript '%s' spliced to an empty sequence." % info.key)
                dropped_n += 1
                continue

            transcripts.add(transcript)

    if dropped_n > 0:
        logging.warning(
            "%d transcripts without any base on their contig were discarded!" % dropped_n)

    return transcripts


def write_transcriptome(reference_fp: str, annotation_fp: str, output_fp: str) -> int:
    """Write the spliced transcripts to a FASTA file, returning their number"""

    annotation = load_exon_annotation(annotation_fp)
    transcripts = make_transcripts(annotation, load_sequences(reference_fp))
    transcripts.write_fasta(output_fp)
    logging.info("%d transcripts written to '%s'." % (len(transcripts), output_fp))
    return len(transcripts)
