import pytest

from autorebase.clients.go_client import GoClient
from autorebase.errors import CollaboratorError


@pytest.fixture
def client():
    return GoClient()


def test_mod_edit(monkeypatch, client):
    calls = []
    monkeypatch.setattr("autorebase.clients.go_client.run_command", lambda cmd, cwd=None: calls.append(cmd) or "")
    client.mod_edit("/src/go.mod", "-require=k8s.io/api@v0.0.0")
    assert calls == [["go", "mod", "edit", "-require=k8s.io/api@v0.0.0", "/src/go.mod"]]


def test_mod_json(monkeypatch, client):
    output = '{"Replace": [{"Old": {"Path": "k8s.io/api"}, "New": {"Path": "../api"}}]}'
    monkeypatch.setattr("autorebase.clients.go_client.run_command", lambda cmd, cwd=None: output)
    assert client.mod_json("go.mod")["Replace"][0]["Old"]["Path"] == "k8s.io/api"


def test_mod_json_invalid_output(monkeypatch, client):
    monkeypatch.setattr("autorebase.clients.go_client.run_command", lambda cmd, cwd=None: "not json")
    with pytest.raises(CollaboratorError):
        client.mod_json("go.mod")


def test_mod_tidy_runs_in_module_dir(monkeypatch, client):
    calls = []
    monkeypatch.setattr("autorebase.clients.go_client.run_command", lambda cmd, cwd=None: calls.append((cmd, cwd)) or "")
    client.mod_tidy("/src")
    assert calls == [(["go", "mod", "tidy"], "/src")]
