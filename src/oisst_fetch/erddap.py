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
import logging

import pandas as pd
import xarray

from oisst_fetch.datetime import isoformat
from oisst_fetch.query import DateBatch, QuerySpec

logger = logging.getLogger(__name__)

TIME = "time"
LATITUDE = "latitude"
LONGITUDE = "longitude"


def griddap_url(server: str, dataset_id: str) -> str:
    return f"{server.rstrip('/')}/griddap/{dataset_id}"


def _coord_slice(ds: xarray.Dataset, name: str, lo, hi) -> slice:
    # label slices must follow the direction of the coordinate
    if ds.indexes[name].is_monotonic_decreasing and len(ds.indexes[name]) > 1:
        return slice(hi, lo)
    return slice(lo, hi)


class ErddapSource:
    """Reads griddap subsets over OPeNDAP

    Calling the source with a query and a batch returns the raw response as a
    flat table with one row per grid point, e.g. the columns ``time, zlev,
    latitude, longitude, sst`` for OISST. Network errors are not caught.
    """

    def __init__(self):
        self._datasets: dict[str, xarray.Dataset] = {}

    def open(self, server: str, dataset_id: str) -> xarray.Dataset:
        url = griddap_url(server, dataset_id)
        if url not in self._datasets:
            logger.info(f"Opening {url}")
            self._datasets[url] = xarray.open_dataset(url)
        return self._datasets[url]

    def close(self):
        for ds in self._datasets.values():
            ds.close()
        self._datasets.clear()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def __call__(self, spec: QuerySpec, batch: DateBatch) -> pd.DataFrame:
        ds = self.open(spec.server, spec.dataset_id)
        arr = ds[spec.variable]

        indexers = {
            TIME: slice(isoformat(batch.start), isoformat(batch.end)),
            LATITUDE: _coord_slice(ds, LATITUDE, *spec.latitude),
            LONGITUDE: _coord_slice(ds, LONGITUDE, *spec.longitude),
        }
        for dim in arr.dims:
            if dim not in indexers:
                indexers[dim] = _coord_slice(ds, dim, *spec.depth)

        logger.info(
            f"Requesting {spec.variable} from {spec.dataset_id} for "
            f"{isoformat(batch.start)}..{isoformat(batch.end)}"
        )
        subset = arr.sel(indexers).load()
        return subset.to_dataframe().reset_index()
