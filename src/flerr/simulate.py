import argparse

from flerr.logging import logger
from flerr.resource import ResourceSource, OperationError, run_loop

_logger = logger(__name__)

class SimulateSubcommand:
    """The `simulate` subcommand of the flerr CLI. It runs scenarios from the
    config file through the resource loop and reports the joined error each
    scenario produced.
    """
    name = "simulate"

    def main(self, scenarios, parsed_args) -> int:
        if parsed_args.scenario:
            known = {s.name: s for s in scenarios}
            unknown = [name for name in parsed_args.scenario if name not in known]
            if unknown:
                _logger.error(f"unknown scenarios: {', '.join(unknown)}")
                return 1
            scenarios = [known[name] for name in parsed_args.scenario]

        exit_status = 0
        for scenario in scenarios:
            err, leaked = self.run_scenario(scenario)
            if err is None:
                print(f"{scenario.name}: ok")
            else:
                exit_status = 1
                print(f"{scenario.name}: failed")
                for line in str(err).splitlines():
                    print(f"    {line}")
            if leaked:
                exit_status = 1
                print(f"{scenario.name}: leaked: {', '.join(leaked)}")
        return exit_status

    @staticmethod
    def run_scenario(scenario):
        """Run `scenario` and return a tuple of the error it produced (or None)
        and the names of any resources it leaked.
        """
        source = ResourceSource(fail_open=scenario.fail_open, fail_close=scenario.fail_close)
        def operation(n, _dst, _src):
            if n in scenario.fail_operation:
                raise OperationError(n)
        _logger.info(f"running scenario: {scenario.name}")
        try:
            run_loop(source, scenario.iterations, operation)
        except Exception as exc:
            _logger.debug(f"scenario {scenario.name} failed", exc_info=True)
            return exc, source.leaked()
        return None, source.leaked()

    @classmethod
    def add_argparser_arguments(cls, parser:argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--scenario",
            action="append",
            default=[],
            metavar="NAME",
            help="run only scenario NAME (may be given multiple times)"
        )
