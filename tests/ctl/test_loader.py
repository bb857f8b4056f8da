import pytest

from linectl.core.loader import LineConfLoader
from linectl.core.model import ContextConfig, LineConf
from linectl.core.utils import parse_timeout, resolve_context


@pytest.fixture
def lineconf(tmp_path):
    file = tmp_path / "lineconf.yaml"
    file.write_text(
        "current-context: prod\n"
        "contexts:\n"
        "  prod:\n"
        "    server: chat.example.com:12345\n"
        "    timeout: 500ms\n"
        "  local:\n"
        "    server: localhost:4000\n"
    )
    return file


@pytest.mark.ut
def test_load_explicit_path(lineconf):
    conf = LineConfLoader(str(lineconf)).load()

    assert conf.current_context == "prod"
    assert conf.contexts["prod"] == ContextConfig(server="chat.example.com:12345", timeout="500ms")
    assert conf.contexts["local"].timeout == "5s"


@pytest.mark.ut
def test_load_from_environment(lineconf, monkeypatch):
    monkeypatch.setenv("LINECONF", str(lineconf))

    assert LineConfLoader().path == lineconf


@pytest.mark.ut
def test_missing_default_file_falls_back(tmp_path, monkeypatch):
    monkeypatch.delenv("LINECONF", raising=False)
    monkeypatch.setattr(LineConfLoader, "DEFAULT_PATH", str(tmp_path / "missing.yaml"))

    assert LineConfLoader().load() == LineConf.default()


@pytest.mark.ut
def test_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        LineConfLoader(str(tmp_path / "missing.yaml")).load()


@pytest.mark.ut
def test_invalid_file(tmp_path):
    file = tmp_path / "lineconf.yaml"
    file.write_text("contexts: []\n")

    with pytest.raises(ValueError):
        LineConfLoader(str(file)).load()


@pytest.mark.ut
def test_malformed_yaml_file(tmp_path):
    file = tmp_path / "lineconf.yaml"
    file.write_text("contexts: [unclosed\n")

    with pytest.raises(ValueError, match="not valid YAML"):
        LineConfLoader(str(file)).load()


@pytest.mark.ut
@pytest.mark.parametrize("text,expected", [
    ("5s", 5.0),
    ("250ms", 0.25),
    ("2", 2.0),
    ("", None),
    ("0", None),
])
def test_parse_timeout(text, expected):
    assert parse_timeout(text) == expected


@pytest.mark.ut
def test_resolve_context_override(lineconf):
    conf = LineConfLoader(str(lineconf)).load()

    name, ctx = resolve_context(conf, "local", None)
    assert name == "local"
    assert ctx.server == "localhost:4000"

    name, ctx = resolve_context(conf, None, "10.0.0.1:1")
    assert name == "prod"
    assert ctx == ContextConfig(server="10.0.0.1:1", timeout="500ms")


@pytest.mark.ut
def test_resolve_unknown_context_falls_back(lineconf, capsys):
    conf = LineConfLoader(str(lineconf)).load()

    name, ctx = resolve_context(conf, "nope", None)
    assert name == ""
    assert ctx.server == "localhost:12345"

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "unknown context 'nope'" in captured.err
