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

import os
import pathlib

from txome.sequences import SeqRecord, SequenceCollection


def get_data_file_path(fp):
    return os.path.join(pathlib.Path(__file__).parent.absolute(), 'data', fp)


def get_gtf_row(contig, start, end, strand, transcript_id, feature='exon'):
    attrs = f'gene_id "G"; transcript_id "{transcript_id}";'
    return '\t'.join([contig, 'test', feature, str(start), str(end), '.', strand, '.', attrs])


def write_lines(fp, lines):
    with open(fp, 'w', encoding='utf-8') as fh:
        for line in lines:
            fh.write(line)
            fh.write('\n')
    return str(fp)


def write_fasta(fp, seqs):
    return write_lines(fp, [
        line
        for header, data in seqs
        for line in (f">{header}", data)
    ])


def get_genome(seqs):
    return SequenceCollection([
        SeqRecord(i, header, data)
        for i, (header, data) in enumerate(seqs)
    ])
