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
"""The four-column table consumed by marine heatwave detection

One row per grid point and day::

    lon     lat     date        value
    18.125  -37.625 1982-01-01  19.3

"""

import numpy as np
import pandas as pd

from oisst_fetch.datetime import as_date

CANONICAL_COLUMNS = ["lon", "lat", "date", "value"]
# dates are always stored at nanosecond resolution, whatever unit the input used
DATE_DTYPE = "datetime64[ns]"

# accepted names of each canonical field in a raw response, in order of preference
FIELD_ALIASES = {
    "lon": ("lon", "longitude"),
    "lat": ("lat", "latitude"),
    "date": ("date", "time", "timestamp"),
}


def empty_table() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "lon": np.array([], dtype="float64"),
            "lat": np.array([], dtype="float64"),
            "date": np.array([], dtype=DATE_DTYPE),
            "value": np.array([], dtype="float64"),
        }
    )


def _find_field(raw: pd.DataFrame, names, canonical: str) -> str:
    for name in names:
        if name in raw.columns:
            return name
    raise KeyError(f"Response has no {canonical} field, expected one of {names}.")


def to_canonical(raw: pd.DataFrame, variable: str) -> pd.DataFrame:
    """Reshape a raw response into the canonical table

    The time field becomes a plain calendar date, ``variable`` becomes
    ``value``, every other field is dropped and so is any row with a missing
    entry. Row order of ``raw`` is preserved.
    """
    if len(raw.columns) == 0:
        return empty_table()

    renames = {_find_field(raw, names, key): key for key, names in FIELD_ALIASES.items()}
    renames[_find_field(raw, (variable,), "value")] = "value"

    table = raw[list(renames)].rename(columns=renames).copy()
    table["date"] = as_date(table["date"]).to_numpy()
    table = table[CANONICAL_COLUMNS].dropna()
    return table.reset_index(drop=True)


def concat(tables: list[pd.DataFrame]) -> pd.DataFrame:
    tables = [table for table in tables if len(table)]
    if not tables:
        return empty_table()
    return pd.concat(tables, ignore_index=True)
