import json
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def petstore_path() -> Path:
    return FIXTURES / "petstore.json"


@pytest.fixture
def petstore_v2_path() -> Path:
    return FIXTURES / "petstore_v2.yaml"


@pytest.fixture
def petstore() -> dict:
    return json.loads((FIXTURES / "petstore.json").read_text(encoding="utf-8"))
