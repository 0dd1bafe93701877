"""Replay a scripted poker session through the betting engine.

The script is a JSON object::

    {
        "players": [["alice", 1000], ["bob", 1000], ["carol", 1000]],
        "blinds": {"sb": 10, "bb": 20},
        "steps": [
            {"start_hand": true},
            {"action": "raise", "amount": 60},
            {"action": "call"},
            {"action": "fold"},
            {"award": {"pot": 0, "winners": [1]}},
            {"add_chips": {"player": 2, "amount": 500}}
        ]
    }

Each step is applied in order. Rejected steps are reported and skipped. The
final snapshot and settle-up transfers are printed as JSON.
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, List

from data.serialization import dump_state
from data.types.action_result import ActionResult
from exceptions import InvalidActionError, TableTallyError
from game import GameConfig, PokerGame
from game.settlement import poker_owings
from loggers.config import DEFAULT_LOG_LEVELS, configure_loggers
from util import load_script, setup_logging

logger = logging.getLogger(__name__)


def run_step(game: PokerGame, step: Dict[str, Any]) -> ActionResult:
    """Dispatch one script step to the game."""
    if step.get("start_hand"):
        return game.start_new_hand()
    if "action" in step:
        return game.act(step["action"], step.get("amount"))
    if "award" in step:
        award = step["award"]
        return game.award_pot(award.get("pot", 0), award["winners"])
    if "add_player" in step:
        return game.add_player(step["add_player"]["name"], step["add_player"].get("stack"))
    if "remove_player" in step:
        return game.remove_player(step["remove_player"])
    if "add_chips" in step:
        return game.add_chips(step["add_chips"]["player"], step["add_chips"]["amount"])
    raise InvalidActionError(f"Unrecognised step: {step}")


def replay(script: Dict[str, Any], config: GameConfig) -> Dict[str, Any]:
    """Replay a script and return the final snapshot with its settle-up."""
    blinds = script.get("blinds", {})
    config = replace(
        config,
        small_blind=blinds.get("sb", config.small_blind),
        big_blind=blinds.get("bb", config.big_blind),
    )
    game = PokerGame([tuple(p) for p in script["players"]], config=config)

    rejected: List[Dict[str, Any]] = []
    for number, step in enumerate(script.get("steps", []), start=1):
        result = run_step(game, step)
        if not result.accepted:
            logger.warning(f"Step {number} rejected: {result.message}")
            rejected.append({"step": number, "reason": result.message})

    return {
        "state": json.loads(dump_state(game.state)),
        "rejected": rejected,
        "owings": [t.model_dump() for t in poker_owings(game.state)],
    }


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Replay a scripted poker session and print the resulting table"
    )
    parser.add_argument("script", help="Path to the JSON session script")
    parser.add_argument("--env-file", help="Path to a .env file with TABLETALLY_* settings")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument("--log-level", default="INFO", help="Log level for the engine loggers")
    args = parser.parse_args(argv)

    session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    setup_logging(session_id, log_file=args.log_file)
    configure_loggers({name: args.log_level for name in DEFAULT_LOG_LEVELS})

    try:
        config = GameConfig.from_env(args.env_file)
        script = load_script(args.script)
        output = replay(script, config)
    except (OSError, ValueError, KeyError, TableTallyError) as e:
        logger.error(f"Could not replay {args.script}: {e}")
        return 1

    json.dump(output, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
