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
from typing import Callable, Optional

import pandas as pd
import tqdm

from oisst_fetch.config import environment as config
from oisst_fetch.datetime import isoformat
from oisst_fetch.erddap import ErddapSource
from oisst_fetch.query import DateBatch, QuerySpec, make_batches
from oisst_fetch.storage import ResponseCache
from oisst_fetch.table import concat, to_canonical

logger = logging.getLogger(__name__)

Source = Callable[[QuerySpec, DateBatch], pd.DataFrame]


def fetch_batch(
    spec: QuerySpec,
    batch: DateBatch,
    *,
    source: Optional[Source] = None,
    cache: Optional[ResponseCache] = None,
) -> pd.DataFrame:
    """Download one batch and return it in the canonical ``lon, lat, date, value`` form

    Args:
        spec: the variable, depth and lat/lon box to request
        batch: the date range of this request
        source: callable returning the raw response for ``(spec, batch)``.
            Defaults to reading the griddap dataset over OPeNDAP.
        cache: if given, raw responses are looked up here first and stored
            after a successful download

    Network failures propagate to the caller.
    """
    if source is None:
        with ErddapSource() as owned:
            return fetch_batch(spec, batch, source=owned, cache=cache)

    def request():
        return source(spec, batch)

    if cache is None:
        raw = request()
    else:
        raw = cache.get_or_fetch(spec.cache_key(batch), request)

    table = to_canonical(raw, spec.variable)
    logger.info(
        f"Batch {batch.index} ({isoformat(batch.start)}..{isoformat(batch.end)}): "
        f"kept {len(table)} of {len(raw)} records"
    )
    return table


def fetch_all(
    spec: QuerySpec,
    max_span_years: int = config.MAX_SPAN_YEARS,
    *,
    source: Optional[Source] = None,
    cache: Optional[ResponseCache] = None,
    progress: bool = True,
) -> pd.DataFrame:
    """Download the full date range of ``spec`` one batch at a time

    Batches are requested sequentially and concatenated in date order. If any
    batch fails the whole call fails; run it again with the same ``cache`` to
    pick up where it stopped.
    """
    batches = make_batches(spec.start, spec.end, max_span_years)
    if len(batches) > config.MAX_REQUESTS_PER_SESSION:
        logger.warning(
            f"{len(batches)} requests exceed the {config.MAX_REQUESTS_PER_SESSION} "
            "the server usually accepts in one session, later batches may be refused"
        )

    owns_source = source is None
    source = source or ErddapSource()
    tables = []
    try:
        for batch in tqdm.tqdm(batches, disable=not progress):
            tables.append(fetch_batch(spec, batch, source=source, cache=cache))
    finally:
        if owns_source:
            source.close()

    table = concat(tables)
    logger.info(f"Fetched {len(table)} records in {len(batches)} batches")
    return table
