# tests/utils/__init__.py

from .fakes import FakeCompiler, FakeMultiStats, FakeStats, FakeWatching
from .service import make_build_config, make_service, touch


__all__ = [  # noqa: RUF022
    # fakes
    "FakeCompiler",
    "FakeMultiStats",
    "FakeStats",
    "FakeWatching",
    # service
    "make_build_config",
    "make_service",
    "touch",
]
