"""src/flerr/config.py"""
import dataclasses
from pathlib import Path
import yaml
import voluptuous as vlp

class ConfigErrors(Exception):
    """Raised by `parse_config()`. The `errors` attribute is a list of
    (scenario_name, error_message) tuples.
    """
    def __init__(self, errors:list[tuple[str, str]]):
        super().__init__("\n".join(f"{name}: {msg}" for name, msg in errors))
        self.errors = errors

@dataclasses.dataclass
class Scenario:
    """A run of the resource loop with configured failures. See
    `flerr.resource.run_loop()`.
    """
    name: str
    iterations: int = 10
    fail_open: list[int] = dataclasses.field(default_factory=list)
    fail_close: list[int] = dataclasses.field(default_factory=list)
    fail_operation: list[int] = dataclasses.field(default_factory=list)

class ScenarioSchema():
    """Voluptuous schema for a single scenario in a flerr config file."""

    class ErrMsg:
        SCENARIO_NOT_A_MAPPING = "Scenario settings must be a mapping"
        NOT_A_COUNTER = "Not a non-negative integer"
        CONFIG_NOT_A_MAPPING = "Config file must be a mapping of scenario names to scenario settings"

    @staticmethod
    def is_counter(n) -> int:
        """Validator to ensure `n` is a non-negative int. YAML booleans are
        rejected even though bool is a subclass of int.
        """
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise vlp.Invalid(ScenarioSchema.ErrMsg.NOT_A_COUNTER)
        return n

    @staticmethod
    def counters() -> vlp.Schema:
        """Schema for a list of open counters or iteration numbers."""
        return vlp.Schema([ScenarioSchema.is_counter])

    @staticmethod
    def schema() -> vlp.Schema:
        """Validate the settings of one scenario and fill in defaults."""
        return vlp.Schema(
            {vlp.Optional("iterations", default=10): ScenarioSchema.is_counter,
             vlp.Optional("fail_open", default=list): ScenarioSchema.counters(),
             vlp.Optional("fail_close", default=list): ScenarioSchema.counters(),
             vlp.Optional("fail_operation", default=list): ScenarioSchema.counters()})

def parse_yaml_string(string:str) -> list[Scenario]:
    """Returns a list of Scenarios, given a YAML string. Raises ConfigErrors
    holding every problem found.
    """
    try:
        data = yaml.safe_load(string)
    except yaml.YAMLError as exc:
        raise ConfigErrors([("<config>", f"invalid YAML: {exc}")]) from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigErrors([("<config>", ScenarioSchema.ErrMsg.CONFIG_NOT_A_MAPPING)])
    schema = ScenarioSchema.schema()
    scenarios = []
    errors = []
    for name, spec in data.items():
        if spec is None:
            spec = {}
        if not isinstance(spec, dict):
            errors.append((str(name), ScenarioSchema.ErrMsg.SCENARIO_NOT_A_MAPPING))
            continue
        try:
            spec = schema(spec)
        except vlp.MultipleInvalid as exc:
            for err in exc.errors:
                errors.append((str(name), str(err)))
            continue
        scenarios.append(Scenario(str(name), **spec))
    if errors:
        raise ConfigErrors(errors)
    return scenarios

def parse_config(config_path:(Path | str)) -> list[Scenario]:
    """Returns a list of Scenarios, given a path to a YAML config file. Raises
    ConfigErrors if the file cannot be read or is invalid.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            string = f.read()
    except OSError as exc:
        raise ConfigErrors([("<config>", f"could not read {config_path}: {exc.strerror}")]) from exc
    return parse_yaml_string(string)
