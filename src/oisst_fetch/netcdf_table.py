# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
import errno
import logging
import os
import shlex
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd
import xarray

from oisst_fetch.table import CANONICAL_COLUMNS, DATE_DTYPE

logger = logging.getLogger(__name__)

DIM = "obs"
ENGINE = "netcdf4"


def save(
    table: pd.DataFrame, destination_path, attrs: Optional[Dict[str, Any]] = None
):
    """Write the canonical table to a compressed netCDF file

    An existing file at ``destination_path`` is replaced. The parent directory
    must already exist and be writable.
    """
    path = Path(destination_path)
    if not path.parent.is_dir():
        raise FileNotFoundError(
            errno.ENOENT, "Output directory does not exist", str(path.parent)
        )
    if not os.access(path.parent, os.W_OK):
        raise PermissionError(
            errno.EACCES, "Output directory is not writable", str(path.parent)
        )

    frame = table[CANONICAL_COLUMNS].reset_index(drop=True).rename_axis(DIM)
    frame["date"] = frame["date"].astype(DATE_DTYPE)
    ds = xarray.Dataset.from_dataframe(frame)
    ds.attrs["history"] = shlex.join(sys.argv)
    if attrs:
        ds.attrs.update(attrs)
    ds["lon"].attrs["units"] = "degrees_east"
    ds["lat"].attrs["units"] = "degrees_north"

    encoding = {name: {"zlib": True, "complevel": 4} for name in CANONICAL_COLUMNS}
    tmp_out = tempfile.mktemp(dir=path.parent.as_posix(), prefix=path.name)
    logger.info(f"Writing {len(frame)} records to {path}")
    try:
        ds.to_netcdf(tmp_out, engine=ENGINE, encoding=encoding)
    except BaseException:
        if os.path.exists(tmp_out):
            os.remove(tmp_out)
        raise
    shutil.move(tmp_out, path)


def load(path) -> pd.DataFrame:
    with xarray.open_dataset(path, engine=ENGINE) as ds:
        table = ds.to_dataframe()
    table = table.reset_index(drop=True)[CANONICAL_COLUMNS].copy()
    table["date"] = table["date"].astype(DATE_DTYPE)
    return table
