import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from barkeep.harness import Scenario, build_engine, run_scenario


class Simulation:
    def __init__(self, scenario: Scenario) -> None:
        self.scenario = scenario
        self.engine = build_engine(scenario)

    def run(self) -> list[dict]:
        return [step.model_dump(exclude_none=True) for step in run_scenario(self.scenario, self.engine)]


def load_scenario(path: str) -> Scenario:
    text = Path(path).read_text(encoding="utf-8")
    return Scenario.model_validate_json(text)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Replay a bar scenario script through the mixing engine.")
    parser.add_argument("scenario", type=str, help="Path to a scenario JSON file.")
    parser.add_argument("--events", action="store_true", help="Also print the engine event log.")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation of the transcript.")
    args = parser.parse_args(argv)

    try:
        scenario = load_scenario(args.scenario)
    except (OSError, ValidationError) as exc:
        print(f"Could not load scenario '{args.scenario}': {exc}", file=sys.stderr)
        return 2

    simulation = Simulation(scenario)
    output = {"scenario": scenario.name, "steps": simulation.run()}
    if args.events:
        output["events"] = simulation.engine.events()
    print(json.dumps(output, indent=args.indent, ensure_ascii=False, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
