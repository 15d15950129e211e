import string
import pytest

from passkeep.cli import main
from passkeep.config import Config, load_config
from passkeep.generate import SYMBOLS_DATA

ALL_CHARS = set(string.ascii_letters + string.digits + string.punctuation)

def run(argv, capsys):
    main(argv)
    return capsys.readouterr().out.splitlines()

def run_failing(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 1
    return capsys.readouterr().err

@pytest.fixture
def config_toml(tmp_path):
    return str(tmp_path / "config.toml")

def test_default(config_toml, capsys):
    lines = run(["-c", config_toml], capsys)
    assert len(lines) == 1
    assert len(lines[0]) == 20
    assert set(lines[0]) <= ALL_CHARS

def test_generate_subcommand(config_toml, capsys):
    lines = run(["generate", "-c", config_toml, "-l", "33", "-n", "3"], capsys)
    assert len(lines) == 3
    assert all(len(line) == 33 for line in lines)

def test_class_flags(config_toml, capsys):
    lines = run(["-c", config_toml, "--no-lowercase", "--no-uppercase",
        "--no-numbers", "-l", "50"], capsys)
    assert all(c in SYMBOLS_DATA for c in lines[0])

def test_config_file(config_toml, capsys):
    with open(config_toml, "w") as f:
        f.write("length = 7\nlowercase = false\nuppercase = false\nsymbols = false\n")

    lines = run(["-c", config_toml], capsys)
    assert len(lines[0]) == 7
    assert all(c in string.digits for c in lines[0])

    # Command line overrides config file:
    lines = run(["-c", config_toml, "-l", "9", "--uppercase"], capsys)
    assert len(lines[0]) == 9
    assert all(c in string.digits + string.ascii_uppercase for c in lines[0])

def test_template(config_toml, capsys):
    lines = run(["-c", config_toml, "-t", "aaaa5aaaa"], capsys)
    assert len(lines[0]) == 9
    assert all(c in string.ascii_lowercase + string.digits for c in lines[0])

def test_zero_length(config_toml, capsys):
    err = run_failing(["-c", config_toml, "-l", "0"], capsys)
    assert err == "Error: unable to generate password: password must be more than 0 elements\n"

def test_missing_content(config_toml, capsys):
    err = run_failing(["-c", config_toml, "--no-lowercase", "--no-uppercase",
        "--no-symbols", "--no-numbers"], capsys)
    assert err == "Error: unable to generate password: missing possible password contents\n"

def test_bad_template(config_toml, capsys):
    err = run_failing(["-c", config_toml, "-t", "a b"], capsys)
    assert err.startswith("Error: template string contains unknown character")

def test_invalid_config(config_toml, capsys):
    with open(config_toml, "w") as f:
        f.write("length = 0\n")

    err = run_failing(["-c", config_toml], capsys)
    assert err.startswith(f"Error: invalid config file {config_toml}")

def test_init_config(config_toml, capsys):
    lines = run(["init-config", config_toml], capsys)
    assert lines == [f"Default configuration written to {config_toml}."]

    lines = run(["init-config", config_toml], capsys)
    assert lines == [f"Configuration {config_toml} already exists."]

    lines = run(["-c", config_toml], capsys)
    assert len(lines[0]) == 20

@pytest.mark.parametrize("argv", [
    ["-l", "5", "generate"],
    ["generate", "-l", "5"],
    ["-l", "5"],
])
def test_option_order(config_toml, capsys, argv):
    lines = run(["-c", config_toml] + argv, capsys)
    assert len(lines[0]) == 5

def test_options_before_and_after_subcommand(config_toml, capsys):
    lines = run(["-c", config_toml, "--no-symbols", "-n", "2", "generate",
        "--no-uppercase", "-l", "40"], capsys)
    assert len(lines) == 2
    assert all(c in string.ascii_lowercase + string.digits for c in "".join(lines))

def test_init_config_option_before_subcommand(config_toml, capsys):
    lines = run(["-c", config_toml, "init-config"], capsys)
    assert lines == [f"Default configuration written to {config_toml}."]
    assert Config.default() == load_config(config_toml)

def test_flags_override_enabled_class(config_toml, capsys):
    with open(config_toml, "w") as f:
        f.write("length = 60\nuppercase = false\nsymbols = false\nnumbers = false\n")

    lines = run(["-c", config_toml, "--no-lowercase", "--numbers"], capsys)
    assert len(lines[0]) == 60
    assert all(c in string.digits for c in lines[0])
