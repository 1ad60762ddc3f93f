import pytest

from tests.fakes import TEST_DATE, ToolCollector, load_payload


@pytest.fixture
def home_data():
    return load_payload(f"home_{TEST_DATE}.json")


@pytest.fixture
def recovery_deep_dive():
    return load_payload(f"recovery_deep_dive_{TEST_DATE}.json")


@pytest.fixture
def strain_deep_dive():
    return load_payload(f"strain_deep_dive_{TEST_DATE}.json")


@pytest.fixture
def sleep_deep_dive():
    return load_payload(f"sleep_deep_dive_{TEST_DATE}.json")


@pytest.fixture
def collector():
    return ToolCollector()
