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

from enum import Enum


class IndexMode(str, Enum):
    GENOME = 'genome'
    TRANSCRIPTOME = 'transcriptome'

    @property
    def is_transcriptome(self) -> bool:
        return self is IndexMode.TRANSCRIPTOME

    @classmethod
    def from_flag(cls, is_transcriptome: bool):
        return cls.TRANSCRIPTOME if is_transcriptome else cls.GENOME
