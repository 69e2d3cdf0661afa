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

import sqlite3

import pytest
from txome.constants import INDEX_FORMAT_VERSION
from txome.errors import IndexLoadError
from txome.seed_index import SeedIndex, get_shape_offsets, is_valid_shape
from .constants import GENOME_FP, TEST_SHAPE
from .utils import get_data_file_path, get_genome


@pytest.mark.parametrize('shape,valid', [
    ('1', True),
    ('1101', True),
    ('111111', True),
    ('', False),
    ('0110', False),
    ('1102', False)
])
def test_is_valid_shape(shape, valid):
    assert is_valid_shape(shape) == valid


def test_get_shape_offsets():
    assert get_shape_offsets('1101') == [0, 1, 3]
    with pytest.raises(ValueError):
        get_shape_offsets('011')


def test_seed_index_generate_from_sequences():
    index = SeedIndex(shape=TEST_SHAPE)
    index.generate_from_sequences(get_genome([
        ('s1 desc', 'ACGTAC'),
        ('s2', 'ACNTACG')
    ]), is_transcriptome=True)

    assert index.is_transcriptome
    assert index.num_sequences == 2
    assert index.headers == ['s1 desc', 's2']
    assert index.lengths == [6, 7]

    # ACxT at 0 in s1 and at 0 in s2 (the masked base is ignored)
    assert index.lookup('ACGT') == [(0, 0), (1, 0)]
    assert index.lookup('ACTT') == [(0, 0), (1, 0)]
    assert index.lookup('TACG') == [(1, 3)]
    assert index.lookup('GGGG') == []

    # Too short or ambiguous
    assert index.lookup('AC') == []
    assert index.lookup('NNNN') == []


def test_seed_index_generate_from_file():
    index = SeedIndex(shape=TEST_SHAPE)
    index.generate_from_file(get_data_file_path(GENOME_FP))

    assert not index.is_transcriptome
    assert index.num_sequences == 3
    assert index.lengths == [40, 30, 20]


@pytest.mark.parametrize('is_transcriptome', [True, False])
def test_seed_index_store_load(tmp_path, is_transcriptome):
    fp = str(tmp_path / 'index.db')

    index = SeedIndex(shape=TEST_SHAPE)
    index.generate_from_sequences(get_genome([
        ('s1', 'ACGTACGTTT'),
        ('s2 desc', 'GATTACA')
    ]), is_transcriptome=is_transcriptome)
    index.store(fp)

    loaded = SeedIndex()
    loaded.load(fp)

    assert loaded.shape == TEST_SHAPE
    assert loaded.is_transcriptome == is_transcriptome
    assert loaded.seq_ids == index.seq_ids
    assert loaded.headers == index.headers
    assert loaded.lengths == index.lengths
    assert loaded.seqs == index.seqs
    assert loaded.seeds == index.seeds


def test_seed_index_store_overwrite(tmp_path):
    fp = str(tmp_path / 'index.db')

    index = SeedIndex(shape=TEST_SHAPE)
    index.generate_from_sequences(get_genome([('s1', 'ACGTACGT')]))
    index.store(fp)
    index.generate_from_sequences(get_genome([('s2', 'GATTACA')]), is_transcriptome=True)
    index.store(fp)

    loaded = SeedIndex()
    loaded.load(fp)
    assert loaded.headers == ['s2']
    assert loaded.is_transcriptome


def test_seed_index_load_invalid(tmp_path):
    fp = tmp_path / 'index.db'
    fp.write_text('not an index\n' * 100)

    with pytest.raises(IndexLoadError):
        SeedIndex().load(str(fp))


def test_seed_index_load_empty_db(tmp_path):
    fp = str(tmp_path / 'index.db')
    sqlite3.connect(fp).close()

    with pytest.raises(IndexLoadError):
        SeedIndex().load(fp)


def test_seed_index_load_old_version(tmp_path):
    fp = str(tmp_path / 'index.db')

    index = SeedIndex(shape=TEST_SHAPE)
    index.generate_from_sequences(get_genome([('s1', 'ACGTACGT')]))
    index.store(fp)

    with sqlite3.connect(fp) as conn:
        conn.execute(
            "update meta set value = ? where key = 'format_version'",
            (str(INDEX_FORMAT_VERSION - 1),))
    conn.close()

    with pytest.raises(IndexLoadError, match='format version'):
        SeedIndex().load(fp)
