import logging

import pytest

from krushka.core.state import Phase
from krushka.main import build_controller, main, parse_args, run_headless


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("KRUSHKA_ENV", raising=False)


def test_parse_args_defaults():
    args = parse_args([])
    assert args.seed is None
    assert not args.demo and not args.headless and not args.debug
    assert args.frames == 3600


def test_parse_args_values():
    args = parse_args(["--seed", "9", "--headless", "--frames", "10"])
    assert args.seed == 9
    assert args.headless
    assert args.frames == 10


def test_same_seed_same_run(settings):
    first = build_controller(settings, seed=5)
    second = build_controller(settings, seed=5)
    run_headless(first, 2000)
    run_headless(second, 2000)

    a, b = first.snapshot(), second.snapshot()
    assert a == b
    assert a.phase is Phase.PLAYING
    assert a.demo_mode
    assert a.frame == 2000


def test_main_headless(caplog):
    with caplog.at_level(logging.INFO, logger="krushka"):
        main(["--headless", "--frames", "30", "--seed", "1"])

    assert "Headless run finished: frame=30" in caplog.text


def test_main_rejects_bad_config(monkeypatch):
    monkeypatch.setenv("KRUSHKA_SESSION__LIVES", "0")

    with pytest.raises(SystemExit) as exc:
        main(["--headless", "--frames", "1"])
    assert exc.value.code == 1
