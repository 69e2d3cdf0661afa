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
import sqlite3
from contextlib import contextmanager
from enum import Enum
from sqlite3 import Connection, Cursor
from typing import Generator

from .utils import get_ddl_path


class DbTableName(str, Enum):
    META = 'meta'
    SEQUENCES = 'sequences'
    SEEDS = 'seeds'


class DbFieldName(str, Enum):
    KEY = 'key'
    VALUE = 'value'
    IDX = 'idx'
    SEQ_ID = 'seq_id'
    HEADER = 'header'
    LENGTH = 'length'
    DATA = 'data'
    SEED = 'seed'
    SEQ_IDX = 'seq_idx'
    POS = 'pos'


class MetaKey(str, Enum):
    FORMAT_VERSION = 'format_version'
    IS_TRANSCRIPTOME = 'is_transcriptome'
    SEED_SHAPE = 'seed_shape'


def get_insert_values(t: DbTableName, fields: list[DbFieldName]) -> str:
    names = ','.join(f.value for f in fields)
    placeholders = ','.join(['?'] * len(fields))
    return f"insert into {t.value} ({names}) values ({placeholders})"


def get_select(t: DbTableName, fields: list[DbFieldName], order_by: list[DbFieldName] | None = None) -> str:
    names = ','.join(f.value for f in fields)
    query = f"select {names} from {t.value}"
    if not order_by:
        return query
    return f"{query} order by {','.join(f.value for f in order_by)}"


def init_db(conn: Connection) -> None:

    # Load DDL
    with open(get_ddl_path()) as fh:
        ddl = fh.read()

    # Create tables and indices
    with cursor(conn) as cur:
        cur.executescript(ddl)


@contextmanager
def create_db(fp: str) -> Generator[Connection, None, None]:
    """Create a new database, replacing any existing file"""

    if os.path.exists(fp):
        os.remove(fp)

    conn = sqlite3.connect(fp)
    try:
        init_db(conn)
        yield conn
        conn.commit()
    finally:
        conn.close()


@contextmanager
def open_db_read_only(fp: str) -> Generator[Connection, None, None]:
    uri = f"{pathlib.Path(fp).absolute().as_uri()}?mode=ro"
    conn = sqlite3.connect(uri, uri=True)
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def cursor(conn: Connection) -> Generator[Cursor, None, None]:
    cur = conn.cursor()
    try:
        yield cur
    finally:
        cur.close()
