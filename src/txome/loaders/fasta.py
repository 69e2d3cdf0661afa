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

import logging
from contextlib import contextmanager
from typing import Generator

from pysam import FastxFile

from ..sequences import SeqRecord, SequenceCollection


def get_fastx_file(fp: str) -> FastxFile:
    try:
        return FastxFile(fp)
    except IOError as ex:
        logging.critical("Failed to load reference file '%s'!" % fp)
        raise ex


@contextmanager
def open_fasta(fp: str) -> Generator[FastxFile, None, None]:
    ff = get_fastx_file(fp)
    try:
        yield ff
    finally:
        ff.close()


def get_header(name: str, comment: str | None) -> str:
    return f"{name} {comment}" if comment else name


def load_sequences(fp: str) -> SequenceCollection:
    """Load all the sequences of a (multi-)FASTA file in file order"""

    with open_fasta(fp) as ff:
        seqs = SequenceCollection([
            SeqRecord(i, get_header(r.name, r.comment), r.sequence or '')
            for i, r in enumerate(ff)
        ])

    logging.debug("FASTA file '%s': %d sequences loaded." % (fp, len(seqs)))
    return seqs
