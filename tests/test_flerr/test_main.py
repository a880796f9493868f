import pytest
import logging

import flerr.main
import flerr.logging

@pytest.fixture(autouse=True)
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    flerr.logging.disable_logging()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

def test_simulate(example_valid_config_spec, config_file_generator, capsys):
    config_path = config_file_generator(example_valid_config_spec)
    assert 1 == flerr.main.main(["-c", str(config_path), "simulate"])
    out = capsys.readouterr().out
    assert "success: ok\n" in out
    assert "open_failure: failed\n" in out
    assert "operation_failure: failed\n    perform op: operation 2 failed\n" in out

def test_simulate_success_only(example_valid_config_spec, config_file_generator, capsys):
    config_path = config_file_generator(example_valid_config_spec)
    assert 0 == flerr.main.main(["-c", str(config_path), "simulate", "--scenario", "success"])
    assert capsys.readouterr().out == "success: ok\n"

def test_config_error(config_file_generator, capsys):
    config_path = config_file_generator({"broken": {"iterations": "many"}})
    assert 1 == flerr.main.main(["-c", str(config_path), "simulate"])
    assert capsys.readouterr().err.startswith("flerr: config error: broken: ")

def test_missing_subcommand(config_file_generator):
    with pytest.raises(SystemExit) as exc:
        flerr.main.main(["-c", str(config_file_generator({}))])
    assert exc.value.code == 2

def test_log_file(example_valid_config_spec, config_file_generator, path_generator):
    config_path = config_file_generator(example_valid_config_spec)
    logfile = path_generator("flerr_test_main_log")
    flerr.main.main(["-c", str(config_path), "--log-file", str(logfile), "--log-level", "DEBUG",
                     "simulate", "--scenario", "success"])
    assert "running scenario: success" in logfile.read_text()
