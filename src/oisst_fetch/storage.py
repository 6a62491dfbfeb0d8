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
import hashlib
import logging
import os
import pickle
from typing import Callable

import pandas as pd
import zict

from oisst_fetch.config import environment as config

logger = logging.getLogger(__name__)


def key_to_filename(key: tuple) -> str:
    return hashlib.sha256(repr(key).encode()).hexdigest()


class ResponseCache:
    """On-disk cache of raw griddap responses

    Entries are keyed by the full tuple of request parameters, so re-running
    an interrupted download only goes to the server for the batches that
    never completed.
    """

    def __init__(self, directory: str = ""):
        self.directory = directory or os.path.join(config.CACHE_DIR, "responses")
        os.makedirs(self.directory, exist_ok=True)
        self._store = zict.Func(pickle.dumps, pickle.loads, zict.File(self.directory))

    def __contains__(self, key: tuple) -> bool:
        return key_to_filename(key) in self._store

    def __len__(self):
        return len(self._store)

    def __getitem__(self, key: tuple) -> pd.DataFrame:
        return self._store[key_to_filename(key)]

    def __setitem__(self, key: tuple, response: pd.DataFrame):
        self._store[key_to_filename(key)] = response

    def get_or_fetch(
        self, key: tuple, fetch: Callable[[], pd.DataFrame]
    ) -> pd.DataFrame:
        name = key_to_filename(key)
        if name in self._store:
            logger.debug(f"Cache hit {name} for {key}")
            return self._store[name]

        logger.debug(f"Cache miss {name} for {key}")
        response = fetch()
        self._store[name] = response
        return response

    def clear(self):
        self._store.clear()
