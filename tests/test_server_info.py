from videopoker.server_info import DEFAULTS, format_motd, get_server_info, get_setting, load_env_file
from videopoker.version import get_version_info


def test_load_env_file(tmp_path):
    env_path = tmp_path / ".env"
    env_path.write_text("SERVER_ENV=Production\nGAME_VARIANT=deluxe\n# comment\nNAME=value=with=equals\n")
    env_vars = load_env_file(str(env_path))
    assert env_vars["SERVER_ENV"] == "Production"
    assert env_vars["GAME_VARIANT"] == "deluxe"
    # Ensure values with multiple equals are preserved
    assert env_vars["NAME"] == "value=with=equals"


def test_load_env_file_missing(tmp_path):
    assert load_env_file(str(tmp_path / "nope.env")) == {}


def test_get_setting_precedence(monkeypatch):
    monkeypatch.delenv("IDLE_TIMEOUT", raising=False)
    assert get_setting("IDLE_TIMEOUT", {}) == DEFAULTS["IDLE_TIMEOUT"]
    assert get_setting("IDLE_TIMEOUT", {"IDLE_TIMEOUT": "300"}) == "300"
    monkeypatch.setenv("IDLE_TIMEOUT", "45")
    assert get_setting("IDLE_TIMEOUT", {"IDLE_TIMEOUT": "300"}) == "45"


def test_get_server_info_uses_environment(monkeypatch, tmp_path):
    env_path = tmp_path / ".env"
    env_path.write_text("SERVER_ENV=Staging\nSERVER_PORT=10022\nTCP_PORT=9000\n")

    for name in DEFAULTS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SERVER_ENV", "Public Stable")
    monkeypatch.setenv("SERVER_HOST", "poker.example")
    monkeypatch.setenv("SERVER_PORT", "22222")
    monkeypatch.setenv("GAME_VARIANT", "deluxe")
    monkeypatch.chdir(tmp_path)

    info = get_server_info()
    assert info["server_env"] == "Public Stable"
    assert info["server_host"] == "poker.example"
    assert info["server_port"] == "22222"
    assert info["tcp_port"] == "9000"
    assert info["game_variant"] == "deluxe"
    assert info["server_name"] == DEFAULTS["SERVER_NAME"]
    assert info["ssh_connection_string"] == "poker.example -p 22222"
    version_info = get_version_info()
    for key, value in version_info.items():
        assert info[key] == value

    monkeypatch.setenv("SERVER_PORT", "22")
    info_default_port = get_server_info()
    assert info_default_port["ssh_connection_string"] == "poker.example"


def test_format_motd_includes_version(monkeypatch):
    monkeypatch.setattr("videopoker.terminal_ui.Colors.GREEN", "<GREEN>")
    monkeypatch.setattr("videopoker.terminal_ui.Colors.YELLOW", "<YELLOW>")
    monkeypatch.setattr("videopoker.terminal_ui.Colors.CYAN", "<CYAN>")
    monkeypatch.setattr("videopoker.terminal_ui.Colors.BOLD", "<BOLD>")
    monkeypatch.setattr("videopoker.terminal_ui.Colors.RESET", "<RESET>")
    monkeypatch.setattr("videopoker.terminal_ui.Colors.DIM", "<DIM>")

    motd = format_motd({
        "server_name": "Poker",
        "server_env": "Public Stable",
        "ssh_connection_string": "poker.example -p 22222",
        "game_variant": "deluxe",
        "version": "1.0.0",
        "build_date": "today",
    })
    assert "<CYAN>Poker<RESET>" in motd
    assert "<GREEN>Public Stable<RESET>" in motd
    assert "<BOLD>deluxe<RESET>" in motd
    assert "<BOLD>ssh <username>@poker.example -p 22222<RESET>" in motd
    assert "1.0.0" in motd
    assert "today" in motd


def test_format_motd_skips_dev_version():
    motd = format_motd({
        "server_name": "Poker",
        "server_env": "Development",
        "ssh_connection_string": "localhost -p 22222",
        "game_variant": "classic",
        "version": "dev",
        "build_date": "dev",
    })
    assert "Version" not in motd
    assert "classic" in motd
