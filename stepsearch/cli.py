# stepsearch/cli.py
# Terminal stepper: builds a problem and an algorithm from the command line, prints every
# step (node id, action, g, h, status) and the final statistics, optionally exporting the tree.
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .algorithms.registry import ALGORITHMS, build_algorithm
from .config import HEURISTICS, SearchSettings, setup_logging
from .core.interchange import load_tree, node_to_dict
from .core.utils import fmt_number, reconstruct_path
from .errors import StepSearchError
from .problems.checks import parse_board_text, tiles_grid
from .problems.factory import PROBLEM_TYPES, build_problem
from .runner import is_iteration_heavy

logger = logging.getLogger(__name__)


def _print_board(problem, state) -> None:
    board = problem.board_state(state)
    if board is None:
        return
    if all(isinstance(c, int) for c in board):
        for row in tiles_grid(board):
            print("    " + " ".join(str(t) if t else "_" for t in row))
    else:
        for r in range(3):
            print("    " + " ".join(c or "." for c in board[r * 3:r * 3 + 3]))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="stepsearch", description="Step through a search algorithm.")
    ap.add_argument("--problem", default="8puzzle", choices=PROBLEM_TYPES)
    ap.add_argument("--algo", default="astar", help=f"one of {', '.join(ALGORITHMS)}")
    ap.add_argument("--board", help="initial board, e.g. '1,2,3,4,0,6,7,5,8' or 'X,_,O,...'")
    ap.add_argument("--tree", type=Path, help="interchange JSON for --problem custom")
    ap.add_argument("--max-depth", type=int)
    ap.add_argument("--iterations", type=int, help="MCTS iteration budget")
    ap.add_argument("--exploration", type=float, help="MCTS exploration constant")
    ap.add_argument("--seed", type=int, help="MCTS rollout seed")
    ap.add_argument("--heuristic", choices=HEURISTICS)
    ap.add_argument("--max-player", choices=("X", "O"))
    ap.add_argument("--steps", type=int, help="stop after this many steps (default: fast-forward ceiling)")
    ap.add_argument("--quiet", action="store_true", help="only print the summary")
    ap.add_argument("--show-boards", action="store_true")
    ap.add_argument("--export", type=Path, help="write the final tree as interchange JSON")
    ap.add_argument("--log-level", default="WARNING")
    return ap


def _settings_from_args(args) -> SearchSettings:
    overrides = {
        "max_depth": args.max_depth,
        "mcts_iterations": args.iterations,
        "mcts_exploration": args.exploration,
        "mcts_seed": args.seed,
        "heuristic": args.heuristic,
        "max_player": args.max_player,
    }
    return SearchSettings.from_env(**{k: v for k, v in overrides.items() if v is not None})


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        settings = _settings_from_args(args)
        tree = load_tree(args.tree) if args.tree else None
        problem = build_problem(args.problem, settings, board=parse_board_text(args.board), tree=tree)
        algo = build_algorithm(args.algo, problem, settings)
    except StepSearchError as e:
        print(f"error: {e}")
        return 2
    if algo is None:
        print(f"error: unknown algorithm {args.algo!r}; choose from {', '.join(ALGORITHMS)}")
        return 2

    limit = args.steps
    if limit is None:
        limit = settings.fast_forward_heavy_limit if is_iteration_heavy(algo) else settings.fast_forward_limit

    taken = 0
    while taken < limit and not algo.get_status().is_terminal:
        node = algo.step()
        taken += 1
        if node is None or args.quiet:
            continue
        action = "-" if node.parent is None else problem.node_name(node.state, node.action)
        print(f"[{taken:4d}] {node.id:<14} {action:<12} g={fmt_number(node.g)} h={fmt_number(node.h)} "
              f"{algo.get_status().value}")
        if args.show_boards:
            _print_board(problem, node.state)

    print(f"\n{algo.name}: {algo.get_status().value} after {taken} steps")
    goal = getattr(algo, "goal", None)
    if goal is not None:
        actions, cost = reconstruct_path(goal)
        print(f"  path ({len(actions)} moves, cost {fmt_number(cost)}): "
              + " -> ".join(problem.action_label(a) for a in actions))
    for k, v in algo.get_attributes().items():
        if isinstance(v, list):
            v = ", ".join(map(str, v[:10])) + (" ..." if len(v) > 10 else "")
        elif isinstance(v, float):
            v = fmt_number(v)
        print(f"  {k}: {v}")

    if args.export:
        args.export.write_text(json.dumps(node_to_dict(algo.get_tree(), problem), indent=2), encoding="utf-8")
        print(f"Wrote {args.export}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
