# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AccountListingDTO(BaseModel):
    username: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
