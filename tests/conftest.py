### conftest.py is implicitly imported into all pytest test files. This file
### can be thought of as a collection of globally available pytest fixtures.

import pytest
import shutil
from random import choice
from string import ascii_lowercase
from pathlib import Path

import yaml

from flerr.resource import ResourceSource

@pytest.fixture
def random_string_generator():
    """Fixture for generating random ascii lowercase strings of arbitrary length."""
    def generator(length=5):
        return "".join(choice(ascii_lowercase) for i in range(length))
    return generator

@pytest.fixture
def path_generator(random_string_generator, tmp_path):
    """Fixture for generating paths that do not exist on the system. Allows
    callers to specify the prefix of the basename of the path, the length of the
    basenames random suffix, the base_dir of the path, and if the path should be
    removed during cleanup. The base_dir defaults to a pytest tmp_path.
    """
    tmp_paths_to_cleanup = []
    def generator(name_prefix, base_dir=None, suffix_length=5, mkdir=False, touch=False, cleanup=False):
        base_dir = Path(base_dir) if base_dir is not None else tmp_path
        new_path = None
        while new_path is None or new_path.exists():
            basename = name_prefix + random_string_generator(length=suffix_length)
            new_path = base_dir.joinpath(basename)
        if mkdir:
            new_path.mkdir(parents=True)
        elif touch:
            new_path.touch(exist_ok=False)
        if cleanup:
            tmp_paths_to_cleanup.append(new_path)
        return new_path

    yield generator

    for path in tmp_paths_to_cleanup:
        if path.is_file():
            path.unlink()
        elif path.is_dir():
            shutil.rmtree(path)

@pytest.fixture
def config_file_generator(path_generator):
    """Fixture for writing scenario config files. The generator accepts either
    a dict, which is dumped as YAML, or a raw string, and returns the path to
    the written file.
    """
    def generator(spec):
        config_path = path_generator("flerr-test-config-", touch=True)
        text = spec if isinstance(spec, str) else yaml.safe_dump(spec, sort_keys=False)
        config_path.write_text(text, encoding="utf-8")
        return config_path
    return generator

@pytest.fixture
def resource_source():
    """Fixture providing a ResourceSource that never fails."""
    return ResourceSource()

@pytest.fixture
def example_valid_config_spec():
    """Scenarios mirroring the documented cleanup behaviour of the resource loop."""
    return {
        "success": {"iterations": 10},
        "open_failure": {"fail_open": [1], "fail_close": [0]},
        "operation_and_close_failure": {"fail_close": [0, 1], "fail_operation": list(range(10))},
        "operation_failure": {"fail_operation": [2]},
    }
