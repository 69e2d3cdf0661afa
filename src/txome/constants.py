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

DATA_PATH = 'data'

DDL_FN = 'ddl.sql'

# Bumped whenever the persisted layout or the transcript key format changes
INDEX_FORMAT_VERSION = 2

DEFAULT_SEED_SHAPE = '1111110111111'

GTF_EXON_FEATURE = 'exon'
GTF_MIN_FIELDS = 9

TRANSCRIPT_KEY_SEPARATOR = '_'

FASTA_LINE_WIDTH = 60

SAM_HEADER_SQ = '@SQ'
