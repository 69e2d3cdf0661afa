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

import json
import logging
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationError

from . import __version__ as APP_VERSION
from .constants import DEFAULT_SEED_SHAPE
from .enums import IndexMode
from .errors import InvalidConfig
from .seed_index import is_valid_shape


class IndexConfig(BaseModel):
    app_version: str = Field(alias='appVersion', default=APP_VERSION)

    # Paths
    reference_fp: str = Field(alias='referencePath')
    index_fp: str = Field(alias='indexPath')
    annotation_fp: Optional[str] = Field(alias='annotationPath', default=None)
    sam_header_fp: Optional[str] = Field(alias='samHeaderPath', default=None)

    # Index
    seed_shape: str = Field(alias='seedShape', default=DEFAULT_SEED_SHAPE)

    class Config:
        populate_by_name = True

    def __init__(__pydantic_self__, **data: Any) -> None:
        super().__init__(**data)
        if not __pydantic_self__.is_valid():
            raise InvalidConfig()

    @property
    def mode(self) -> IndexMode:
        return IndexMode.from_flag(self.annotation_fp is not None)

    @property
    def input_file_paths(self) -> List[str]:
        fps: List[str] = [self.reference_fp]
        if self.annotation_fp is not None:
            fps.append(self.annotation_fp)
        return fps

    def write(self, fp: str) -> None:
        with open(fp, 'w') as fh:
            fh.write(self.model_dump_json(by_alias=True))

    def is_valid(self) -> bool:
        success: bool = True

        if not is_valid_shape(self.seed_shape):
            logging.error("Invalid seed shape '%s'!" % self.seed_shape)
            success = False

        if self.index_fp in self.input_file_paths:
            logging.error("The index file path can't be the same as an input file path!")
            success = False

        return success


def load_config(fp: str) -> IndexConfig:
    with open(fp) as fh:
        try:
            config_dict = json.load(fh)
        except json.JSONDecodeError:
            raise InvalidConfig("not a JSON!")

    if not isinstance(config_dict, dict):
        raise InvalidConfig("not a JSON object!")

    try:
        return IndexConfig(**config_dict)
    except ValidationError as ex:
        raise InvalidConfig(f"{ex.error_count()} invalid fields")
