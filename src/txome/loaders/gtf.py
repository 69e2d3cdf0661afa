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
from enum import IntEnum, Enum

from .csv import load_tsv
from .utils import parse_uint_range_from_list
from ..annotation import ExonAnnotation
from ..constants import GTF_EXON_FEATURE, GTF_MIN_FIELDS
from ..errors import InvalidAnnotation
from ..exon import Exon
from ..strings.strand import STRANDS, Strand
from ..utils import trim_to_first_space


class GtfField(IntEnum):
    SEQNAME = 0
    SOURCE = 1
    FEATURE = 2
    START = 3
    END = 4
    SCORE = 5
    STRAND = 6
    FRAME = 7
    ATTRIBUTE = 8


class GtfAttribute(Enum):
    TRANSCRIPT_ID = 'transcript_id'


def parse_attribute_value(s: str) -> str:
    """Extract the text between the first pair of double quotes, if any"""

    parts = s.split('"')
    return parts[1] if len(parts) > 2 else s.strip()


def parse_gtf_attributes(s: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for clause in s.split(';'):
        kv = clause.strip().split(' ', 1)
        if len(kv) == 2:
            # The first occurrence of a key wins
            attrs.setdefault(kv[0], parse_attribute_value(kv[1]))
    return attrs


def get_transcript_id(attributes: str) -> str | None:
    return parse_gtf_attributes(attributes).get(GtfAttribute.TRANSCRIPT_ID.value)


def is_exon_row(r: list[str]) -> bool:
    return len(r) >= GTF_MIN_FIELDS and r[GtfField.FEATURE] == GTF_EXON_FEATURE


def parse_exon(r: list[str]) -> Exon:
    return Exon.from_range(parse_uint_range_from_list(
        r, GtfField.START, GtfField.END))


def parse_strand(s: str) -> Strand | None:
    c = s[:1]
    return Strand(c) if c in STRANDS else None


def load_exon_annotation(fp: str) -> ExonAnnotation:
    """
    Group the exon records of a GTF file by transcript and contig

    Rows with fewer than nine fields or of a feature type other than exon
    are ignored. Exons of each transcript are sorted by start position.
    """

    annotation = ExonAnnotation()
    no_id_n: int = 0
    no_strand_n: int = 0

    try:
        for line_no, r in enumerate(load_tsv(fp), start=1):
            if not is_exon_row(r):
                continue

            transcript_id = get_transcript_id(r[GtfField.ATTRIBUTE])
            if not transcript_id:
                no_id_n += 1
                continue

            try:
                exon = parse_exon(r)
            except ValueError as ex:
                raise InvalidAnnotation(
                    f"Invalid exon at line {line_no} of '{fp}': {ex.args[0]}") from ex

            # Unrecognised strands are spliced forward
            strand = parse_strand(r[GtfField.STRAND])
            if strand is None:
                no_strand_n += 1
                strand = Strand('.')

            annotation.add_exon(
                transcript_id,
                trim_to_first_space(r[GtfField.SEQNAME]),
                strand,
                exon)

    except UnicodeDecodeError as ex:
        raise InvalidAnnotation(
            f"Failed to decode annotation file '{fp}' as {ex.encoding}: {ex.reason}") from ex

    except OSError as ex:
        logging.critical("Failed to load annotation file '%s'!" % fp)
        raise ex

    if no_id_n > 0:
        logging.warning(
            "%d exon records without transcript identifier were discarded!" % no_id_n)

    if no_strand_n > 0:
        logging.warning(
            "%d exon records with an unrecognised strand were read as unstranded!" % no_strand_n)

    annotation.sort_exons()

    logging.debug("GTF file '%s': %d transcripts found on %d contigs." % (
        fp, len(annotation), len(annotation.contig_transcripts)))

    return annotation
