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
import logging
import sqlite3

from .constants import DEFAULT_SEED_SHAPE, INDEX_FORMAT_VERSION
from .db import DbFieldName, DbTableName, MetaKey, create_db, cursor, get_insert_values, get_select, open_db_read_only
from .errors import IndexLoadError
from .loaders.fasta import load_sequences
from .sequences import SequenceCollection

NTS = frozenset('ACGT')

sql_insert_meta = get_insert_values(
    DbTableName.META,
    [DbFieldName.KEY, DbFieldName.VALUE])

sql_insert_sequence = get_insert_values(
    DbTableName.SEQUENCES,
    [
        DbFieldName.IDX,
        DbFieldName.SEQ_ID,
        DbFieldName.HEADER,
        DbFieldName.LENGTH,
        DbFieldName.DATA
    ])

sql_insert_seed = get_insert_values(
    DbTableName.SEEDS,
    [DbFieldName.SEED, DbFieldName.SEQ_IDX, DbFieldName.POS])

sql_select_meta = get_select(
    DbTableName.META,
    [DbFieldName.KEY, DbFieldName.VALUE])

sql_select_sequences = get_select(
    DbTableName.SEQUENCES,
    [DbFieldName.SEQ_ID, DbFieldName.HEADER, DbFieldName.LENGTH, DbFieldName.DATA],
    order_by=[DbFieldName.IDX])

sql_select_seeds = get_select(
    DbTableName.SEEDS,
    [DbFieldName.SEED, DbFieldName.SEQ_IDX, DbFieldName.POS],
    order_by=[DbFieldName.SEQ_IDX, DbFieldName.POS])


def is_valid_shape(shape: str) -> bool:
    return (
        len(shape) > 0 and
        set(shape) <= {'0', '1'} and
        shape[0] == '1' and
        shape[-1] == '1'
    )


def get_shape_offsets(shape: str) -> list[int]:
    if not is_valid_shape(shape):
        raise ValueError(f"Invalid seed shape '{shape}'!")
    return [i for i, c in enumerate(shape) if c == '1']


@dataclass
class SeedIndex:
    """
    Spaced seed hash over the forward strand of a sequence collection

    The index records whether it was built over a transcriptome; that flag
    and the format version are persisted alongside the sequences.
    """

    shape: str = DEFAULT_SEED_SHAPE
    is_transcriptome: bool = False
    seq_ids: list[int] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)
    lengths: list[int] = field(default_factory=list)
    seqs: list[str] = field(default_factory=list)
    seeds: dict[str, list[tuple[int, int]]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._offsets = get_shape_offsets(self.shape)

    @property
    def span(self) -> int:
        return len(self.shape)

    @property
    def num_sequences(self) -> int:
        return len(self.headers)

    def clear(self) -> None:
        self.seq_ids.clear()
        self.headers.clear()
        self.lengths.clear()
        self.seqs.clear()
        self.seeds.clear()

    def get_seed(self, s: str, pos: int) -> str | None:
        if pos < 0 or pos + self.span > len(s):
            return None
        seed = ''.join(s[pos + o] for o in self._offsets).upper()
        return seed if set(seed) <= NTS else None

    def _add_seeds(self, seq_idx: int, s: str) -> None:
        for pos in range(len(s) - self.span + 1):
            seed = self.get_seed(s, pos)
            if seed is not None:
                self.seeds.setdefault(seed, []).append((seq_idx, pos))

    def generate_from_sequences(self, seqs: SequenceCollection, is_transcriptome: bool = False) -> None:
        self.clear()
        self.is_transcriptome = is_transcriptome

        for seq_idx, seq in enumerate(seqs):
            self.seq_ids.append(seq.seq_id)
            self.headers.append(seq.header)
            self.lengths.append(len(seq))
            self.seqs.append(seq.data)
            self._add_seeds(seq_idx, seq.data)

        logging.debug("Index generated: %d sequences, %d distinct seeds." % (
            self.num_sequences, len(self.seeds)))

    def generate_from_file(self, fp: str) -> None:
        self.generate_from_sequences(load_sequences(fp), is_transcriptome=False)

    def lookup(self, s: str) -> list[tuple[int, int]]:
        """Find the occurrences of the seed starting at the first base of a sequence"""

        seed = self.get_seed(s, 0)
        return self.seeds.get(seed, []) if seed is not None else []

    def store(self, fp: str) -> None:
        with create_db(fp) as conn:
            with cursor(conn) as cur:
                cur.executemany(sql_insert_meta, [
                    (MetaKey.FORMAT_VERSION.value, str(INDEX_FORMAT_VERSION)),
                    (MetaKey.IS_TRANSCRIPTOME.value, str(int(self.is_transcriptome))),
                    (MetaKey.SEED_SHAPE.value, self.shape)
                ])
                cur.executemany(sql_insert_sequence, [
                    (i, seq_id, header, length, data)
                    for i, (seq_id, header, length, data) in enumerate(zip(
                        self.seq_ids, self.headers, self.lengths, self.seqs))
                ])
                cur.executemany(sql_insert_seed, [
                    (seed, seq_idx, pos)
                    for seed, hits in self.seeds.items()
                    for seq_idx, pos in hits
                ])

    def load(self, fp: str) -> None:
        """
        Load a persisted index

        Raises IndexLoadError if the file is not a readable index or was
        generated with a different format version.
        """

        try:
            with open_db_read_only(fp) as conn:
                with cursor(conn) as cur:
                    meta = dict(cur.execute(sql_select_meta).fetchall())

                    version = int(meta[MetaKey.FORMAT_VERSION.value])
                    if version != INDEX_FORMAT_VERSION:
                        raise IndexLoadError(
                            f"format version {version} (expected {INDEX_FORMAT_VERSION})")

                    shape = meta[MetaKey.SEED_SHAPE.value]
                    self._offsets = get_shape_offsets(shape)
                    self.shape = shape
                    self.clear()
                    self.is_transcriptome = meta[MetaKey.IS_TRANSCRIPTOME.value] == '1'

                    for seq_id, header, length, data in cur.execute(sql_select_sequences):
                        self.seq_ids.append(seq_id)
                        self.headers.append(header)
                        self.lengths.append(length)
                        self.seqs.append(data)

                    for seed, seq_idx, pos in cur.execute(sql_select_seeds):
                        self.seeds.setdefault(seed, []).append((seq_idx, pos))

        except sqlite3.Error as ex:
            raise IndexLoadError(f"not a valid index file ({ex})")
        except KeyError as ex:
            raise IndexLoadError(f"missing metadata '{ex.args[0]}'")
        except ValueError as ex:
            raise IndexLoadError(ex.args[0])

        logging.debug("Index loaded from '%s': %d sequences." % (fp, self.num_sequences))
