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
import datetime
import cftime
import pandas as pd


def _from_cftime(time):
    if isinstance(time, cftime.datetime):
        return datetime.datetime(*cftime.to_tuple(time)[:6])
    return time


def _wall_clock(time) -> pd.Timestamp:
    # drop the zone without converting, 05:00+10:00 stays on the same day
    ts = pd.Timestamp(_from_cftime(time))
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts


def as_timestamp(time) -> pd.Timestamp:
    """Convert a date-like scalar to a timezone-naive timestamp at midnight"""
    return _wall_clock(time).normalize()


def as_date(values) -> pd.Series:
    """Strip the time of day and timezone from a column of times

    Accepts datetime64 values, python or cftime datetimes, and ISO 8601
    strings such as ``"1982-01-01T00:00:00Z"``. The calendar date is the one
    written in the timestamp, offsets are dropped rather than converted to
    UTC. Missing entries stay ``NaT``. The result is ``datetime64[ns]``.
    """
    values = pd.Series(values)
    if isinstance(values.dtype, pd.DatetimeTZDtype):
        times = values.dt.tz_localize(None)
    elif pd.api.types.is_datetime64_dtype(values.dtype):
        times = values
    else:
        times = pd.to_datetime(values.map(_wall_clock, na_action="ignore"))
    return times.dt.normalize().astype("datetime64[ns]")


def add_years(time: pd.Timestamp, years: int) -> pd.Timestamp:
    # DateOffset clips Feb 29 to Feb 28 on non-leap years
    return time + pd.DateOffset(years=years)


def isoformat(time: pd.Timestamp) -> str:
    return time.strftime("%Y-%m-%d")
