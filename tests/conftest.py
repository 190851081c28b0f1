"""pytest 共通設定: 方言ごとの SqlBuilder fixture."""

from __future__ import annotations

import pytest

from sqltext import Dialect, SqlBuilder


@pytest.fixture
def empty() -> SqlBuilder:
    """エスケープなし・位置プレースホルダの SqlBuilder."""
    return SqlBuilder(Dialect.EMPTY)


@pytest.fixture
def mssql() -> SqlBuilder:
    """角括弧エスケープ・名前付きプレースホルダの SqlBuilder."""
    return SqlBuilder(Dialect.MSSQL)


@pytest.fixture(params=list(Dialect), ids=lambda d: d.name)
def dialect(request: pytest.FixtureRequest) -> Dialect:
    """全方言."""
    return request.param
