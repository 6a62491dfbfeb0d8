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
"""Download daily OISST for a lat/lon box and save it as a lon/lat/date/value table

If the server times out part way through, run the same command again. Batches
that already finished are read from the response cache.

Example:
    python scripts/download_oisst.py --lat -40 -35 --lon 15 21 \
        --start 1982-01-01 --end 2019-12-31 -o OISST_vignette.nc
"""
import argparse
import logging

from oisst_fetch.config import environment as config
from oisst_fetch.fetcher import fetch_all
from oisst_fetch.netcdf_table import save
from oisst_fetch.query import QuerySpec
from oisst_fetch.storage import ResponseCache


def parse_args(args=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--variable", default=config.OISST_VARIABLE)
    parser.add_argument(
        "--lat", type=float, nargs=2, default=[-40.0, -35.0], metavar=("MIN", "MAX")
    )
    parser.add_argument(
        "--lon", type=float, nargs=2, default=[15.0, 21.0], metavar=("MIN", "MAX")
    )
    parser.add_argument("--depth", type=float, default=0.0, help="zlev to request")
    parser.add_argument("--start", default="1982-01-01")
    parser.add_argument("--end", default="2019-12-31")
    parser.add_argument(
        "--max-span-years",
        type=int,
        default=config.MAX_SPAN_YEARS,
        help="Longest date range sent in a single request",
    )
    parser.add_argument("--server", default=config.ERDDAP_SERVER)
    parser.add_argument("--dataset-id", default=config.OISST_DATASET_ID)
    parser.add_argument(
        "--cache-dir",
        default="",
        help="Where raw responses are cached [default: $OISST_CACHE_DIR/responses]",
    )
    parser.add_argument("--no-cache", action="store_true")
    parser.add_argument(
        "--output-path",
        "-o",
        type=str,
        default="OISST_vignette.nc",
        help="Path to save the netCDF table",
    )
    return parser.parse_args(args)


def main(args=None):
    args = parse_args(args)
    logging.basicConfig(level=logging.INFO)

    spec = QuerySpec(
        variable=args.variable,
        depth=(args.depth, args.depth),
        latitude=tuple(args.lat),
        longitude=tuple(args.lon),
        start=args.start,
        end=args.end,
        server=args.server,
        dataset_id=args.dataset_id,
    )
    cache = None if args.no_cache else ResponseCache(args.cache_dir)
    table = fetch_all(spec, args.max_span_years, cache=cache)
    save(
        table,
        args.output_path,
        attrs={"source": spec.server, "dataset_id": spec.dataset_id, "variable": spec.variable},
    )


if __name__ == "__main__":
    main()
