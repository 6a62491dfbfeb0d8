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
"""
Downloading and preparing NOAA OISST data
=========================================

Daily 1/4 degree OISST off the south-west coast of South Africa, 1982-2019,
reshaped into the lon/lat/date/value table expected by marine heatwave
detection.

The ERDDAP server refuses requests spanning nine years or more, so the record
is fetched in five batches of at most eight years. Downloading the full record
takes a while and the server may time out; simply run this script again.
Batches that already finished come back from the response cache.
"""

import logging

from oisst_fetch import QuerySpec, ResponseCache, fetch_all, make_batches, save


def main():
    logging.basicConfig(level=logging.INFO)

    spec = QuerySpec(
        variable="sst",
        latitude=(-40, -35),
        longitude=(15, 21),
        start="1982-01-01",
        end="2019-12-31",
    )

    for batch in make_batches(spec.start, spec.end, max_span_years=8):
        print(batch.index, batch.start.date(), batch.end.date())

    table = fetch_all(spec, max_span_years=8, cache=ResponseCache())
    print(table.head())

    save(table, "OISST_vignette.nc")
    print("Saved OISST_vignette.nc")


if __name__ == "__main__":
    main()
