# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Client configuration."""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, field_validator

from dmquery.errors import InvalidArgumentError

DEFAULT_CLUSTER = "api"
DEFAULT_TIMEOUT = 30.0
DEFAULT_POLL_INTERVAL = 5.0


def cluster_base_url(cluster: str) -> str:
    return f"https://{cluster}.cognitedata.com"


class ClientConfig(BaseModel):
    """Connection settings for ``DataModelClient``.

    ``timeout`` applies to each HTTP request and ``poll_interval`` is the
    default idle wait of ``SyncResource.stream_changes``, both in seconds.
    """

    project: str
    base_url: str = cluster_base_url(DEFAULT_CLUSTER)
    timeout: float = DEFAULT_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL

    @field_validator("project")
    @classmethod
    def check_project(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("project cannot be empty")
        return value

    @field_validator("base_url")
    @classmethod
    def check_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return value

    @field_validator("timeout", "poll_interval")
    @classmethod
    def check_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be greater than 0")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Read ``CDF_PROJECT``, ``CDF_BASE_URL`` or ``CDF_CLUSTER``, and ``CDF_TIMEOUT``."""
        env = os.environ if environ is None else environ
        project = env.get("CDF_PROJECT")
        if not project:
            raise InvalidArgumentError("CDF_PROJECT environment variable is not set")
        base_url = env.get("CDF_BASE_URL") or cluster_base_url(env.get("CDF_CLUSTER") or DEFAULT_CLUSTER)
        values = {"project": project, "base_url": base_url}
        timeout = env.get("CDF_TIMEOUT")
        if timeout:
            values["timeout"] = timeout
        return cls(**values)
