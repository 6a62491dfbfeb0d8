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
from oisst_fetch.query import DateBatch, QuerySpec, make_batches
import numpy as np
import pandas as pd
import pytest


def _check_coverage(batches, start, end, max_span_years):
    assert batches[0].start == pd.Timestamp(start)
    assert batches[-1].end == pd.Timestamp(end)
    for i, batch in enumerate(batches):
        assert batch.index == i + 1
        assert batch.start <= batch.end
        assert batch.end < batch.start + pd.DateOffset(years=max_span_years)
    for prev, nxt in zip(batches[:-1], batches[1:]):
        assert nxt.start == prev.end + pd.Timedelta(days=1)


def test_make_batches_two_batches():
    batches = make_batches("1982-01-01", "1998-12-31", 9)
    assert batches == [
        DateBatch(1, pd.Timestamp("1982-01-01"), pd.Timestamp("1990-12-31")),
        DateBatch(2, pd.Timestamp("1991-01-01"), pd.Timestamp("1998-12-31")),
    ]


def test_make_batches_vignette_range():
    batches = make_batches("1982-01-01", "2019-12-31", 8)
    starts = [b.start.strftime("%Y-%m-%d") for b in batches]
    assert starts == [
        "1982-01-01",
        "1990-01-01",
        "1998-01-01",
        "2006-01-01",
        "2014-01-01",
    ]
    _check_coverage(batches, "1982-01-01", "2019-12-31", 8)


def test_make_batches_exact_span():
    batches = make_batches("1982-01-01", "1990-12-31", 9)
    assert len(batches) == 1


def test_make_batches_one_day_over():
    batches = make_batches("1982-01-01", "1991-01-01", 9)
    assert len(batches) == 2
    assert batches[1].start == batches[1].end == pd.Timestamp("1991-01-01")


def test_make_batches_single_day():
    (batch,) = make_batches("2000-06-15", "2000-06-15", 1)
    assert batch.start == batch.end


@pytest.mark.parametrize(
    "start, end, max_span_years",
    [
        ("1982-01-01", "2019-12-31", 1),
        ("1984-02-29", "2021-03-01", 3),
        ("1981-09-01", "2024-05-17", 8),
        ("2000-01-01", "2000-12-31", 5),
    ],
)
def test_make_batches_covers_range(start, end, max_span_years):
    batches = make_batches(start, end, max_span_years)
    _check_coverage(batches, start, end, max_span_years)


@pytest.mark.parametrize("max_span_years", [0, -1, 2.5, True])
def test_make_batches_bad_span(max_span_years):
    with pytest.raises(ValueError):
        make_batches("1982-01-01", "1990-01-01", max_span_years)


def test_make_batches_reversed_range():
    with pytest.raises(ValueError):
        make_batches("1990-01-01", "1982-01-01", 9)


def test_date_batch_end_before_start():
    with pytest.raises(ValueError):
        DateBatch(1, pd.Timestamp("2000-01-02"), pd.Timestamp("2000-01-01"))


def test_query_spec_normalizes_inputs():
    spec = QuerySpec(
        latitude=(-40, -35),
        longitude=(15, 21),
        start="1982-01-01T00:00:00Z",
        end="1998-12-31",
    )
    assert spec.start == pd.Timestamp("1982-01-01")
    assert spec.end == pd.Timestamp("1998-12-31")
    assert spec.latitude == (-40.0, -35.0)
    assert spec.depth == (0.0, 0.0)
    assert spec.variable == "sst"


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(start="1999-01-01", end="1998-12-31"),
        dict(latitude=(-35, -40)),
        dict(latitude=(-95, -35)),
        dict(longitude=(15, 400)),
        dict(longitude=(-200, 21)),
        dict(depth=(0, 10)),
    ],
)
def test_query_spec_invalid(kwargs):
    args = dict(
        latitude=(-40, -35), longitude=(15, 21), start="1982-01-01", end="1998-12-31"
    )
    args.update(kwargs)
    with pytest.raises(ValueError):
        QuerySpec(**args)


def test_cache_key_differs_per_batch():
    spec = QuerySpec(
        latitude=(-40, -35), longitude=(15, 21), start="1982-01-01", end="1998-12-31"
    )
    a, b = make_batches(spec.start, spec.end, 9)
    assert spec.cache_key(a) != spec.cache_key(b)
    assert spec.cache_key(a) == spec.cache_key(make_batches(spec.start, spec.end, 9)[0])


def test_make_batches_numpy_integer_span():
    assert make_batches("1982-01-01", "1998-12-31", np.int64(9)) == make_batches(
        "1982-01-01", "1998-12-31", 9
    )
