# SPDX-License-Identifier: MIT

from __future__ import annotations

from typing import List

Snowflake = str
SnowflakeList = List[Snowflake]
