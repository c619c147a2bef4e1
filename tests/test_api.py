import pytest

pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from fastapi.testclient import TestClient

from ngsreports.api.main import create_app


@pytest.fixture
def client(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    with TestClient(create_app()) as client:
        yield client


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_modules_lists_every_decoder(client):
    modules = client.get("/api/modules").json()
    assert len(modules) == 12
    names = {m["name"] for m in modules}
    assert "Sequence_Duplication_Levels" in names


def test_parse_reports(client, tmp_path, make_output):
    paths = [str(make_output(tmp_path, "A")), str(make_output(tmp_path, "B", archive=False))]
    response = client.post("/reports/parse", json={"paths": paths})
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Parsed 2 of 2 report(s)."
    assert data["failures"] == []
    assert data["reports"][1]["Basic_Statistics"]["rows"][0]["Filename"] == "B.fastq.gz"
    assert data["reports"][0]["Kmer_Content"]["rows"][0]["Max_Obs/Exp_Position"] == "140-144"


def test_parse_missing_resource(client, tmp_path):
    response = client.post("/reports/parse", json={"paths": [str(tmp_path / "nope_fastqc.zip")]})
    assert response.status_code == 404


def test_parse_malformed_report(client, tmp_path, make_output, make_lines):
    path = make_output(tmp_path, "bad", lines=make_lines("bad.fastq.gz", drop=("Basic Statistics",)))
    response = client.post("/reports/parse", json={"paths": [str(path)]})
    assert response.status_code == 422
    assert "Basic_Statistics" in response.json()["detail"]


def test_parse_partial(client, tmp_path, make_output):
    paths = [str(make_output(tmp_path, "A")), str(tmp_path / "missing")]
    response = client.post("/reports/parse", json={"paths": paths, "partial": True})
    assert response.status_code == 200
    data = response.json()
    assert len(data["reports"]) == 1
    assert data["failures"][0]["index"] == 1
    assert data["failures"][0]["error_type"] == "ResourceUnavailable"


def test_parse_requires_paths(client):
    assert client.post("/reports/parse", json={"paths": []}).status_code == 422


def test_summary(client, tmp_path, make_output):
    run = tmp_path / "run"
    run.mkdir()
    make_output(run, "A")
    make_output(run, "B")
    response = client.get("/reports/summary", params={"directory": str(run)})
    assert response.status_code == 200
    data = response.json()
    assert data["files"] == ["A.fastq.gz", "B.fastq.gz"]
    assert len(data["summary"]) == 24
    assert data["totals"][0] == {"Filename": "A.fastq.gz", "Total_Sequences": 25000}
    assert data["deduplicated"][1]["Total"] == 87.25


def test_summary_bad_directory(client, tmp_path):
    assert client.get("/reports/summary", params={"directory": str(tmp_path / "x")}).status_code == 404
    target = tmp_path / "file.txt"
    target.write_text("")
    assert client.get("/reports/summary", params={"directory": str(target)}).status_code == 400
