from __future__ import annotations

from typing import Any

import pytest

from crate_docs.schema import parse_crate
from tests.builders import demo_crate


@pytest.fixture
def demo_doc() -> dict[str, Any]:
    return demo_crate()


@pytest.fixture
def demo_tree(demo_doc):
    return parse_crate(demo_doc)
