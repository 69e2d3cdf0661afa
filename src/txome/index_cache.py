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
from enum import Enum
import logging
import os

from .annotation import ExonAnnotation
from .constants import DEFAULT_SEED_SHAPE, SAM_HEADER_SQ
from .enums import IndexMode
from .errors import EmptyTranscriptome, IndexLoadError
from .genome_lengths import hash_genome_lengths
from .loaders.fasta import load_sequences
from .loaders.gtf import load_exon_annotation
from .regions import make_regions
from .seed_index import SeedIndex
from .splicer import make_transcripts
from .uint_range import UIntRange
from .utils import trim_to_first_space


class IndexState(str, Enum):
    MISSING = 'missing'
    VALID = 'valid'
    INVALID = 'invalid'


@dataclass(slots=True, frozen=True)
class IndexProbe:
    state: IndexState
    reason: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.state == IndexState.VALID


def get_sam_header_line(name: str, length: int) -> str:
    return f"{SAM_HEADER_SQ}\tSN:{name}\tLN:{length}\n"


@dataclass
class ReferenceIndex:
    """
    Seed index together with the annotation state needed to report on it

    In transcriptome mode the index is built over spliced transcripts, while
    SAM headers still describe the original contigs.
    """

    index: SeedIndex
    annotation: ExonAnnotation | None = None
    regions: dict[str, list[UIntRange]] = field(default_factory=dict)
    genome_lengths: dict[str, int] = field(default_factory=dict)

    @property
    def mode(self) -> IndexMode:
        return IndexMode.from_flag(self.index.is_transcriptome)

    @property
    def is_transcriptome(self) -> bool:
        return self.index.is_transcriptome

    def set_annotation(self, annotation: ExonAnnotation) -> None:
        self.annotation = annotation
        self.regions = make_regions(annotation.transcript_exons)

    def generate_sam_headers(self) -> str:
        if not self.is_transcriptome:
            return ''.join(
                get_sam_header_line(trim_to_first_space(header), length)
                for header, length in zip(self.index.headers, self.index.lengths)
            )

        # Full and trimmed headers share the same trimmed name: one @SQ line per contig,
        # as duplicate sequence names are not valid SAM
        lengths: dict[str, int] = {}
        for name, length in self.genome_lengths.items():
            lengths.setdefault(trim_to_first_space(name), length)

        return ''.join(
            get_sam_header_line(name, length)
            for name, length in lengths.items()
        )


def probe_index(index: SeedIndex, fp: str, mode: IndexMode) -> IndexProbe:
    """Try to load a persisted index and check it matches the requested mode"""

    if not os.path.isfile(fp):
        return IndexProbe(IndexState.MISSING)

    try:
        index.load(fp)
    except IndexLoadError as ex:
        return IndexProbe(
            IndexState.INVALID,
            f"it was generated using an older version or is corrupted ({ex.args[0]})")

    if index.is_transcriptome != mode.is_transcriptome:
        found = IndexMode.from_flag(index.is_transcriptome)
        return IndexProbe(
            IndexState.INVALID,
            f"existing index is a {found.value}, and you are trying to map to a {mode.value}")

    return IndexProbe(IndexState.VALID)


def log_probe(probe: IndexProbe, fp: str) -> None:
    match probe.state:
        case IndexState.MISSING:
            logging.info("Index file '%s' not found: a new index will be generated." % fp)
        case IndexState.INVALID:
            logging.warning("Index needs to be rebuilt: %s." % probe.reason)
        case IndexState.VALID:
            logging.info("Index loaded from file '%s'." % fp)


def store_index(index: SeedIndex, fp: str) -> None:
    logging.info("Storing new index to file '%s'..." % fp)
    index.store(fp)
    logging.info("New index stored.")


def generate_genome(reference_fp: str, shape: str = DEFAULT_SEED_SHAPE) -> ReferenceIndex:
    logging.info("Started generating new index from file '%s'..." % reference_fp)
    index = SeedIndex(shape=shape)
    index.generate_from_file(reference_fp)
    return ReferenceIndex(index)


def generate_transcriptome(
    reference_fp: str,
    annotation: ExonAnnotation,
    shape: str = DEFAULT_SEED_SHAPE
) -> ReferenceIndex:
    """
    Build a seed index over the transcripts spliced out of a genome

    Raises EmptyTranscriptome if no transcript could be spliced.
    """

    logging.info("Loading the genomic sequences.")
    genome = load_sequences(reference_fp)

    logging.info("Constructing the transcriptome sequences.")
    transcripts = make_transcripts(annotation, genome)
    logging.info("In total, there are %d transcripts." % len(transcripts))

    if len(transcripts) == 0:
        raise EmptyTranscriptome(
            f"no transcript could be spliced from '{reference_fp}'")

    index = SeedIndex(shape=shape)
    index.generate_from_sequences(transcripts, is_transcriptome=True)

    ref_index = ReferenceIndex(index, genome_lengths=hash_genome_lengths(genome))
    ref_index.set_annotation(annotation)
    return ref_index


def load_or_generate(reference_fp: str, index_fp: str, shape: str = DEFAULT_SEED_SHAPE) -> ReferenceIndex:
    """
    Reuse the persisted genome index if valid, otherwise generate and store it
    """

    index = SeedIndex(shape=shape)
    probe = probe_index(index, index_fp, IndexMode.GENOME)
    log_probe(probe, index_fp)

    if probe.is_valid:
        return ReferenceIndex(index)

    ref_index = generate_genome(reference_fp, shape=shape)
    store_index(ref_index.index, index_fp)
    return ref_index


def load_or_generate_transcriptome(
    reference_fp: str,
    annotation_fp: str,
    index_fp: str,
    shape: str = DEFAULT_SEED_SHAPE
) -> ReferenceIndex:
    """
    Reuse the persisted transcriptome index if valid, otherwise generate and store it

    The annotation is parsed on every call. On reuse the genome is reloaded
    to recover the contig lengths, which the persisted index does not retain.
    """

    annotation = load_exon_annotation(annotation_fp)

    index = SeedIndex(shape=shape)
    probe = probe_index(index, index_fp, IndexMode.TRANSCRIPTOME)
    log_probe(probe, index_fp)

    if probe.is_valid:
        ref_index = ReferenceIndex(index)
        ref_index.set_annotation(annotation)

        logging.info("Loading the genomic sequences.")
        ref_index.genome_lengths = hash_genome_lengths(load_sequences(reference_fp))
        return ref_index

    ref_index = generate_transcriptome(reference_fp, annotation, shape=shape)
    store_index(ref_index.index, index_fp)
    return ref_index
