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
"""Query description and date batching for griddap requests

ERDDAP refuses a griddap request whose time axis spans too many years, so a
long record is split into consecutive :class:`DateBatch` pieces that are
fetched one after the other::

    spec = QuerySpec(latitude=(-40, -35), longitude=(15, 21),
                     start="1982-01-01", end="1998-12-31")
    make_batches(spec.start, spec.end, max_span_years=9)
    # [DateBatch(1, 1982-01-01, 1990-12-31), DateBatch(2, 1991-01-01, 1998-12-31)]

"""

from dataclasses import dataclass
import numbers

import pandas as pd

from oisst_fetch.config import environment as config
from oisst_fetch.datetime import add_years, as_timestamp

LATITUDE_BOUNDS = (-90.0, 90.0)
# wide enough for both the [-180, 180] and [0, 360] conventions
LONGITUDE_BOUNDS = (-180.0, 360.0)

ONE_DAY = pd.Timedelta(days=1)


def _as_range(name: str, value, bounds=None) -> tuple[float, float]:
    lo, hi = value
    lo, hi = float(lo), float(hi)
    if lo > hi:
        raise ValueError(f"{name} range must be (min, max), got {value}.")
    if bounds is not None and (lo < bounds[0] or hi > bounds[1]):
        raise ValueError(f"{name} range {value} outside of {bounds}.")
    return lo, hi


@dataclass(frozen=True)
class QuerySpec:
    """What to download: one variable at one depth over a lat/lon box and a date range"""

    latitude: tuple[float, float]
    longitude: tuple[float, float]
    start: pd.Timestamp
    end: pd.Timestamp
    variable: str = config.OISST_VARIABLE
    depth: tuple[float, float] = (0.0, 0.0)
    server: str = config.ERDDAP_SERVER
    dataset_id: str = config.OISST_DATASET_ID

    def __post_init__(self):
        start, end = as_timestamp(self.start), as_timestamp(self.end)
        if start > end:
            raise ValueError(f"start {start} is after end {end}.")

        depth = _as_range("depth", self.depth)
        if depth[0] != depth[1]:
            raise ValueError(f"Only a single depth level can be requested, got {depth}.")

        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)
        object.__setattr__(self, "depth", depth)
        object.__setattr__(
            self, "latitude", _as_range("latitude", self.latitude, LATITUDE_BOUNDS)
        )
        object.__setattr__(
            self, "longitude", _as_range("longitude", self.longitude, LONGITUDE_BOUNDS)
        )

    def cache_key(self, batch: "DateBatch") -> tuple:
        """All the parameters that identify the remote request for ``batch``"""
        return (
            self.server,
            self.dataset_id,
            self.variable,
            self.depth,
            self.latitude,
            self.longitude,
            batch.start.isoformat(),
            batch.end.isoformat(),
        )


@dataclass(frozen=True)
class DateBatch:
    index: int
    start: pd.Timestamp
    end: pd.Timestamp

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Batch {self.index} ends before it starts.")


def make_batches(start, end, max_span_years: int) -> list[DateBatch]:
    """Split the inclusive range [start, end] into batches of at most ``max_span_years``

    Each batch begins the day after the previous one ends, so the batches
    cover the range once with no gaps. The last batch may be shorter.
    """
    if isinstance(max_span_years, bool) or not isinstance(max_span_years, numbers.Integral):
        raise ValueError(f"max_span_years must be an int, got {max_span_years!r}.")
    if max_span_years < 1:
        raise ValueError(f"max_span_years must be positive, got {max_span_years}.")
    max_span_years = int(max_span_years)

    start, end = as_timestamp(start), as_timestamp(end)
    if start > end:
        raise ValueError(f"start {start} is after end {end}.")

    batches = []
    batch_start = start
    while batch_start <= end:
        batch_end = min(add_years(batch_start, max_span_years) - ONE_DAY, end)
        batches.append(DateBatch(len(batches) + 1, batch_start, batch_end))
        batch_start = batch_end + ONE_DAY
    return batches
