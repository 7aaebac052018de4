"""FastAPI dependency injection: the storage adapter and shared state."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from fastapi import Request
from fastapi.templating import Jinja2Templates

from gotophoto.application.ports.storage_port import StoragePort
from gotophoto.config import GotoPhotoConfig


@dataclass
class AppState:
    """State built once at startup and attached to ``app.state.gotophoto``."""

    config: GotoPhotoConfig
    storage: StoragePort
    templates: Jinja2Templates
    start_time: float = field(default_factory=time.time)

    @property
    def page_size(self) -> int:
        return self.config.page_size


def get_state(request: Request) -> AppState:
    return request.app.state.gotophoto
