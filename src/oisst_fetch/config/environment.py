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
import os
import dotenv

dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))

CACHE_DIR = os.getenv("OISST_CACHE_DIR", os.path.expanduser("~/.cache/oisst_fetch"))

########
# ERDDAP
########
ERDDAP_SERVER = os.getenv("ERDDAP_SERVER", "https://coastwatch.pfeg.noaa.gov/erddap/")

# NOAA OISST v2.1 daily, longitudes in [-180, 180]
OISST_DATASET_ID = os.getenv("OISST_DATASET_ID", "ncdcOisst21Agg_LonPM180")
OISST_VARIABLE = os.getenv("OISST_VARIABLE", "sst")

# The server refuses griddap requests spanning roughly nine years or more, and
# tends to drop a session after about seventeen sequential requests.
MAX_SPAN_YEARS = int(os.getenv("MAX_SPAN_YEARS", "8"))
MAX_REQUESTS_PER_SESSION = int(os.getenv("MAX_REQUESTS_PER_SESSION", "17"))
