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

import pytest
from txome.errors import InvalidAnnotation
from txome.exon import Exon
from txome.loaders.gtf import get_transcript_id, load_exon_annotation, parse_gtf_attributes
from .constants import ANNOTATION_FP
from .utils import get_data_file_path, get_gtf_row, write_lines


@pytest.mark.parametrize('s,exp', [
    ('gene_id "G1"; transcript_id "T1";', 'T1'),
    ('transcript_id "T1"; transcript_id "T2";', 'T1'),
    ('  transcript_id "T1.2" ;gene_id "G"', 'T1.2'),
    ('transcript_id T5;', 'T5'),
    ('gene_id "G1";', None),
    ('', None)
])
def test_get_transcript_id(s, exp):
    assert get_transcript_id(s) == exp


def test_parse_gtf_attributes():
    assert parse_gtf_attributes('gene_id "G1"; gene_name "A B"; tag;') == {
        'gene_id': 'G1',
        'gene_name': 'A B'
    }


def test_load_exon_annotation():
    annotation = load_exon_annotation(get_data_file_path(ANNOTATION_FP))

    assert annotation.contigs == ['chr1', 'chr2', 'chrX']
    assert [t.key for t in annotation.get_contig_transcripts('chr1')] == ['T1_chr1', 'T2_chr1']
    assert [t.key for t in annotation.get_contig_transcripts('chr2')] == ['T1_chr2', 'T3_chr2']
    assert annotation.get_contig_transcripts('chr3') == []

    t2 = annotation.transcripts['T2_chr1']
    assert t2.transcript_id == 'T2'
    assert t2.contig == 'chr1'
    assert t2.strand.is_minus

    # Exons sorted by start, CDS features ignored
    assert annotation.get_exons('T1_chr1') == [Exon(1, 4), Exon(13, 16)]
    assert annotation.get_exons('T1_chr2') == [Exon(1, 7)]


def test_load_exon_annotation_example(tmp_path):
    fp = write_lines(tmp_path / 'a.gtf', [
        'chr1\tsrc\texon\t100\t200\t.\t+\t.\ttranscript_id "T1";',
        'chr1\tsrc\texon\t300\t400\t.\t+\t.\ttranscript_id "T1";'
    ])
    annotation = load_exon_annotation(fp)

    assert list(annotation.transcripts.keys()) == ['T1_chr1']
    assert [e.to_tuple() for e in annotation.get_exons('T1_chr1')] == [(100, 200), (300, 400)]


def test_load_exon_annotation_skipped_rows(tmp_path):
    fp = write_lines(tmp_path / 'a.gtf', [
        '# comment',
        '',
        'chr1\tsrc\texon\t100\t200\t.\t+\t.',
        get_gtf_row('chr1', 100, 200, '+', 'T1', feature='CDS'),
        get_gtf_row('chr1', 100, 200, '+', 'T1', feature='transcript'),
        'chr1\tsrc\texon\t100\t200\t.\t+\t.\tgene_id "G1";'
    ])
    annotation = load_exon_annotation(fp)

    assert len(annotation) == 0
    assert annotation.transcript_exons == {}


def test_load_exon_annotation_same_id_multiple_contigs(tmp_path):
    fp = write_lines(tmp_path / 'a.gtf', [
        get_gtf_row('chr1', 10, 20, '+', 'T1'),
        get_gtf_row('chr2', 10, 20, '-', 'T1'),
        get_gtf_row('chr1', 1, 5, '-', 'T1')
    ])
    annotation = load_exon_annotation(fp)

    assert set(annotation.transcripts.keys()) == {'T1_chr1', 'T1_chr2'}

    # Strand of the first record wins
    assert annotation.transcripts['T1_chr1'].strand.is_plus
    assert annotation.transcripts['T1_chr2'].strand.is_minus
    assert annotation.get_exons('T1_chr1') == [Exon(1, 5), Exon(10, 20)]
    assert annotation.get_exons('T1_chr2') == [Exon(10, 20)]


def test_load_exon_annotation_contig_description(tmp_path):
    fp = write_lines(tmp_path / 'a.gtf', [
        get_gtf_row('chr1 extra', 10, 20, '+', 'T1')
    ])
    annotation = load_exon_annotation(fp)

    assert annotation.contigs == ['chr1']
    assert 'T1_chr1' in annotation.transcripts


def test_load_exon_annotation_sorted(tmp_path):
    fp = write_lines(tmp_path / 'a.gtf', [
        get_gtf_row('chr1', start, start + 5, '+', 'T1')
        for start in [50, 10, 30, 20, 40]
    ])
    exons = load_exon_annotation(fp).get_exons('T1_chr1')

    starts = [e.start for e in exons]
    assert starts == sorted(starts) == [10, 20, 30, 40, 50]


@pytest.mark.parametrize('start,end', [
    ('a', '10'),
    ('1', '10.5'),
    ('-5', '10')
])
def test_load_exon_annotation_invalid(tmp_path, start, end):
    fp = write_lines(tmp_path / 'a.gtf', [
        get_gtf_row('chr1', 1, 10, '+', 'T0'),
        get_gtf_row('chr1', start, end, '+', 'T1')
    ])
    with pytest.raises(InvalidAnnotation, match='line 2'):
        load_exon_annotation(fp)


def test_load_exon_annotation_missing(tmp_path):
    with pytest.raises(OSError):
        load_exon_annotation(str(tmp_path / 'missing.gtf'))


@pytest.mark.parametrize('strand', ['?', 'x', ''])
def test_load_exon_annotation_unknown_strand(tmp_path, strand):
    fp = write_lines(tmp_path / 'a.gtf', [
        get_gtf_row('chr1', 1, 10, '+', 'T1'),
        get_gtf_row('chr1', 1, 10, strand, 'T2')
    ])
    annotation = load_exon_annotation(fp)

    assert len(annotation) == 2
    t2 = annotation.transcripts['T2_chr1']
    assert t2.strand == '.'
    assert not t2.strand.is_minus


def get_late_utf8_annotation(tmp_path):
    rows = [
        get_gtf_row('chr1', i + 1, i + 2, '+', f'T{i}')
        for i in range(400)
    ]
    rows.append(get_gtf_row('chr1', 1, 4, '+', 'Tü'))
    return write_lines(tmp_path / 'a.gtf', rows)


def test_load_exon_annotation_late_utf8(tmp_path):
    annotation = load_exon_annotation(get_late_utf8_annotation(tmp_path))

    assert len(annotation) == 401
    assert annotation.get_exons('Tü_chr1') == [Exon(1, 4)]


def test_load_exon_annotation_decode_error(tmp_path, monkeypatch):
    fp = get_late_utf8_annotation(tmp_path)
    monkeypatch.setattr('txome.loaders.csv.detect_encoding', lambda fp: 'ascii')

    with pytest.raises(InvalidAnnotation, match='decode'):
        load_exon_annotation(fp)
