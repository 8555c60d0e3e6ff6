import pytest
from fastapi.testclient import TestClient

from vizassist.agent import chart_detector
from vizassist.core.profiler import profile
from vizassist.main import app

SALES_CSV = (
    "region,sales,profit,date\n"
    "North,10,2,2024-01\n"
    "South,20,5,2024-02\n"
    "North,30,4,2024-03\n"
    "East,40,8,2024-04\n"
    "West,50,10,2024-05\n"
    "South,60,11,2024-06\n"
)

NUMERIC_CSV = "x,y,z\n1,2,3\n2,4,1\n3,6,2\n"


@pytest.fixture
def sales_summary():
    return profile(SALES_CSV.encode())


@pytest.fixture
def numeric_summary():
    return profile(NUMERIC_CSV.encode())


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def session_id(client):
    resp = client.post("/api/sessions")
    assert resp.status_code == 200
    return resp.json()["session_id"]


@pytest.fixture(autouse=True)
def _reset_detector_cache():
    chart_detector.clear_cache()
    yield
    chart_detector.clear_cache()


@pytest.fixture
def sales_csv():
    return SALES_CSV.encode()


@pytest.fixture
def numeric_csv():
    return NUMERIC_CSV.encode()
