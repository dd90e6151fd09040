"""Command line interface for Bracketry.

Standard mode runs one command against a tournament snapshot file::

    bracketry -f cup.json new "Spring Cup" --format single_elimination
    bracketry -f cup.json add Alice --seed 1
    bracketry -f cup.json generate
    bracketry -f cup.json result 1.0 2 1

Started without a command, or with ``-i``, it opens an interactive session
that keeps the tournament in memory and saves it in the background.
"""

# Bracketry
# Copyright (C) 2025  Bracketry developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import random
import shlex
import sys
from pathlib import Path
from typing import List, Optional, Tuple, Union

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from bracketry.constants import (
    ALL_FORMATS,
    FORMAT_SINGLE_ELIMINATION,
    FORMAT_SWISS,
    LOGGER_ROOT,
    SEEDING_MODES,
    SWISS_ROUNDS_AUTO,
)
from bracketry.exceptions import BracketryException, SnapshotLoadException
from bracketry.models.participant import Participant
from bracketry.models.tournament.match import Match
from bracketry.models.tournament.tournament import Tournament
from bracketry.models.tournament.tournament_config import TournamentConfig
from bracketry.persistence import DebouncedSync, JsonSnapshotStore
from bracketry.tournament.engine import EngineResult, TournamentEngine
from bracketry.utils import setup_logger

logger = setup_logger(__name__)

DEFAULT_FILE = "tournament.json"


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


class CommandError(BracketryException):
    """A console command could not be carried out."""

    pass


# Command definitions with their options
COMMANDS = {
    "new": {
        "description": "Create a tournament",
        "options": {
            "<name>": "Tournament name",
            "--format": f"One of {', '.join(ALL_FORMATS)}",
            "--seeding": "random, manual or ranked",
            "--groups": "Number of groups (groups format)",
            "--swiss-rounds": "Number of Swiss rounds or 'auto'",
            "--best-of": "Games per match",
            "--best-of-final": "Games in the final of a bracket",
            "--home-and-away": "Championship plays every pairing twice",
            "--low-score-wins": "Lowest score wins (golf style)",
            "--head-to-head": "Break two-way ties on head-to-head",
            "--allow-rematches": "Swiss may pair participants again",
            "--participants": "Names to register right away",
        },
    },
    "add": {
        "description": "Register a participant",
        "options": {"<name>": "Participant name", "--seed": "Seed number"},
    },
    "swap-seeds": {
        "description": "Exchange the seeds of two participants",
        "options": {"<first>": "Participant", "<second>": "Participant"},
    },
    "generate": {
        "description": "Generate the bracket or first round",
        "options": {"--seed": "Random seed for reproducible draws"},
    },
    "start": {"description": "Start the tournament", "options": {}},
    "result": {
        "description": "Record or amend a match result",
        "options": {
            "<match>": "Match id or round.position",
            "<score1> <score2>": "Scores of slot 1 and slot 2",
            "--winner": "Explicit winner (adjudicated draws)",
            "--games": "Game scores, e.g. 2-1,0-2,2-0",
            "--partial": "Save the score without finishing the match",
            "--reason": "Reason for an amendment",
        },
    },
    "next-round": {"description": "Pair the next Swiss round", "options": {}},
    "eliminate": {
        "description": "Eliminate a participant",
        "options": {
            "<participant>": "Participant name or id",
            "--reason": "Reason",
            "--no-repechage": "Always forfeit instead of promoting",
        },
    },
    "reinstate": {
        "description": "Undo an elimination",
        "options": {"<participant>": "Participant name or id"},
    },
    "penalty": {
        "description": "Deduct points from a participant",
        "options": {
            "<participant>": "Participant name or id",
            "<points>": "Points to deduct",
            "<reason>": "Reason",
        },
    },
    "unpenalize": {
        "description": "Remove a penalty",
        "options": {"<penalty>": "Penalty id"},
    },
    "standings": {"description": "Show the standings", "options": {}},
    "matches": {
        "description": "List matches",
        "options": {"--round": "Only this round"},
    },
    "winner": {"description": "Show the champion or the tie", "options": {}},
    "select-winner": {
        "description": "Choose the champion among tied participants",
        "options": {"<participant>": "Participant name or id"},
    },
    "events": {
        "description": "Show the event log",
        "options": {"--limit": "Number of latest events (default: 20)"},
    },
    "help": {
        "description": "Show help for specific command",
        "options": {"<command>": "Command name to get help for"},
    },
    "exit": {"description": "Exit the interactive mode", "options": {}},
}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                         BRACKETRY                             ║
║                                                               ║
║            [Brackets, standings and champions]                ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝{Colors.ENDC}

Type {Colors.BOLD}help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:15}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a specific command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}\n")

    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    completions = {}
    for cmd, info in COMMANDS.items():
        flags = [option for option in info["options"] if option.startswith("--")]
        completions[cmd] = WordCompleter(flags) if flags else None
    completions["help"] = WordCompleter(list(COMMANDS))
    return NestedCompleter.from_nested_dict(completions)


# ========== Session ==========


class ConsoleSession:
    """The tournament a console is working on and where it is saved.

    Without a sync collaborator every committed change is written to
    ``path`` immediately; with one, the engine hands changes to it.
    """

    def __init__(self, path: Union[str, Path], sync: Optional[DebouncedSync] = None):
        self.path = Path(path)
        self.engine = TournamentEngine(sync=sync)
        self.tournament: Optional[Tournament] = None

    def load(self) -> Tournament:
        self.tournament = JsonSnapshotStore.load_path(self.path)
        return self.tournament

    def require_tournament(self) -> Tournament:
        if self.tournament is None:
            raise CommandError("No tournament loaded; create one with 'new'")
        return self.tournament

    def apply(self, result: EngineResult, success: str = "") -> int:
        """Report an engine result and keep the new state on success."""
        for diagnostic in result.diagnostics:
            print(f"{Colors.FAIL}Refused: {diagnostic}{Colors.ENDC}")
        for warning in result.warnings:
            print(f"{Colors.WARNING}Warning: {warning}{Colors.ENDC}")
        if not result.ok:
            return 1

        self.tournament = result.tournament
        if self.engine.sync is None:
            JsonSnapshotStore.write_path(self.path, self.tournament.to_dict())
        if success:
            print(f"{Colors.OKGREEN}{success}{Colors.ENDC}")
        if result.tied_participant_ids:
            names = [
                self.tournament.participant_name(pid)
                for pid in result.tied_participant_ids
            ]
            print(
                f"{Colors.WARNING}Tie for first place between {', '.join(names)}; "
                f"choose the champion with select-winner{Colors.ENDC}"
            )
        return 0

    # ========== Lookups ==========

    def participant_id(self, reference: str) -> str:
        """Resolve a participant id or (case-insensitive) name.

        Unknown references are returned as given so that the engine reports
        them.
        """
        tournament = self.require_tournament()
        if any(p.id == reference for p in tournament.participants):
            return reference
        wanted = reference.lower()
        named = [p for p in tournament.participants if p.name.lower() == wanted]
        if len(named) > 1:
            raise CommandError(
                f"Name '{reference}' is ambiguous; use the participant id"
            )
        return named[0].id if named else reference

    def match_id(self, reference: str) -> str:
        """Resolve a match id, an id prefix or ``round.position``."""
        tournament = self.require_tournament()
        if any(m.id == reference for m in tournament.matches):
            return reference
        round_text, dot, position_text = reference.partition(".")
        if dot and round_text.isdigit() and position_text.isdigit():
            found = [
                m
                for m in tournament.matches
                if m.round == int(round_text) and m.position == int(position_text)
            ]
            if len(found) > 1:
                raise CommandError(
                    f"{reference} names several group matches; use the match id"
                )
            if found:
                return found[0].id
        prefixed = [m for m in tournament.matches if m.id.startswith(reference)]
        if len(prefixed) == 1:
            return prefixed[0].id
        return reference


# ========== Argument types ==========


def score_arg(text: str) -> Union[int, float]:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text}")
    return int(value) if value.is_integer() else value


def swiss_rounds_arg(text: str) -> Union[int, str]:
    if text == SWISS_ROUNDS_AUTO:
        return text
    try:
        return int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number or 'auto', got {text}")


def games_arg(text: str) -> List[Tuple[Union[int, float], Union[int, float]]]:
    """Parse ``2-1,0-2`` into score pairs."""
    games = []
    for chunk in text.split(","):
        first, dash, second = chunk.strip().partition("-")
        if not dash:
            raise argparse.ArgumentTypeError(f"game score must look like 2-1: {chunk}")
        games.append((score_arg(first), score_arg(second)))
    return games


# ========== Output helpers ==========


def _num(value: float) -> str:
    return f"{value:g}"


def _slot_name(tournament: Tournament, match: Match, participant_id) -> str:
    if participant_id:
        return tournament.participant_name(participant_id)
    return "BYE" if match.is_completed else "TBD"


def describe_match(tournament: Tournament, match: Match) -> str:
    first = _slot_name(tournament, match, match.participant1_id)
    second = _slot_name(tournament, match, match.participant2_id)
    if match.winner_id == match.participant1_id and match.winner_id:
        first = f"*{first}"
    elif match.winner_id and match.winner_id == match.participant2_id:
        second = f"*{second}"
    score = "-"
    if match.score is not None:
        score = (
            f"{_num(match.score.participant1_score)}-"
            f"{_num(match.score.participant2_score)}"
        )
    label = f"{match.round}.{match.position}"
    return (
        f"  {label:<6} {first:>20} vs {second:<20} {score:>7}  "
        f"{match.status:<11} {match.id}"
    )


def print_matches(tournament: Tournament, round_number: Optional[int] = None):
    groups = {g.id: g.name for g in tournament.groups}
    current = None
    for match in sorted(tournament.matches, key=lambda m: (m.round, m.position)):
        if round_number is not None and match.round != round_number:
            continue
        if match.round != current:
            current = match.round
            print(f"\n{Colors.BOLD}Round {current}{Colors.ENDC}")
        line = describe_match(tournament, match)
        if match.group_id:
            line += f"  [{groups.get(match.group_id, match.group_id)}]"
        print(line)
    print()


def print_standings(tournament: Tournament, tables) -> None:
    swiss = tournament.format == FORMAT_SWISS
    for group, ranked in tables:
        print(f"\n{Colors.BOLD}{group.name}{Colors.ENDC}")
        header = (
            f"{'#':>3}  {'Participant':24} {'P':>3} {'W':>3} {'D':>3} {'L':>3} "
            f"{'Score':>9} {'Diff':>6} {'Pts':>6}"
        )
        print(header + (f" {'Buch':>6}" if swiss else ""))
        for rank, row in ranked:
            name = tournament.participant_name(row.participant_id)
            if tournament.is_eliminated(row.participant_id):
                name += " (out)"
            totals = f"{_num(row.scored_for)}:{_num(row.scored_against)}"
            line = (
                f"{rank:>3}  {name:24} {row.played:>3} {row.won:>3} "
                f"{row.drawn:>3} {row.lost:>3} {totals:>9} "
                f"{_num(row.differential):>6} {_num(row.points):>6}"
            )
            print(line + (f" {_num(row.buchholz):>6}" if swiss else ""))
    for penalty in tournament.penalties:
        name = tournament.participant_name(penalty.participant_id)
        print(
            f"  penalty {penalty.id}: {name} -{_num(penalty.points)} "
            f"({penalty.reason})"
        )
    print()


# ========== Commands ==========


def cmd_new(session: ConsoleSession, args: argparse.Namespace) -> int:
    config = TournamentConfig.from_dict(
        {
            "seeding": args.seeding,
            "group_count": args.groups,
            "swiss_rounds": args.swiss_rounds,
            "best_of": args.best_of,
            "best_of_final": args.best_of_final,
            "home_and_away": True if args.home_and_away else None,
            "high_score_wins": False if args.low_score_wins else None,
            "use_head_to_head": True if args.head_to_head else None,
            "swiss_avoid_rematches": False if args.allow_rematches else None,
        }
    )
    participants = [Participant.create(name) for name in args.participants or []]
    result = session.engine.create_tournament(
        args.name, args.format, config, participants
    )
    return session.apply(
        result, f"Created {args.format} tournament {args.name} ({session.path})"
    )


def cmd_add(session: ConsoleSession, args: argparse.Namespace) -> int:
    result = session.engine.add_participant(
        session.require_tournament(), args.name, args.seed
    )
    return session.apply(result, f"Added {args.name}")


def cmd_swap_seeds(session: ConsoleSession, args: argparse.Namespace) -> int:
    first = session.participant_id(args.first)
    second = session.participant_id(args.second)
    result = session.engine.swap_seeds(session.require_tournament(), first, second)
    return session.apply(result, "Seeds swapped")


def cmd_generate(session: ConsoleSession, args: argparse.Namespace) -> int:
    rng = random.Random(args.seed) if args.seed is not None else None
    result = session.engine.generate_bracket(session.require_tournament(), rng)
    code = session.apply(result, f"Generated {len(result.tournament.matches)} matches")
    if code == 0:
        print_matches(session.tournament)
    return code


def cmd_start(session: ConsoleSession, args: argparse.Namespace) -> int:
    result = session.engine.start_tournament(session.require_tournament())
    return session.apply(result, "Tournament started")


def cmd_result(session: ConsoleSession, args: argparse.Namespace) -> int:
    tournament = session.require_tournament()
    match_id = session.match_id(args.match)
    winner = session.participant_id(args.winner) if args.winner else None
    result = session.engine.submit_result(
        tournament,
        match_id,
        args.score1,
        args.score2,
        winner_id=winner,
        games=args.games,
        partial=args.partial,
        reason=args.reason,
    )
    code = session.apply(result, "Result recorded")
    if code == 0:
        match = session.tournament.get_match(match_id)
        print(describe_match(session.tournament, match))
        if session.tournament.winner_id:
            name = session.tournament.participant_name(session.tournament.winner_id)
            print(f"{Colors.OKGREEN}Champion: {name}{Colors.ENDC}")
    return code


def cmd_next_round(session: ConsoleSession, args: argparse.Namespace) -> int:
    result = session.engine.generate_next_swiss_round(session.require_tournament())
    code = session.apply(result, "Next round paired")
    if code == 0:
        print_matches(session.tournament, session.tournament.rounds_played)
    return code


def cmd_eliminate(session: ConsoleSession, args: argparse.Namespace) -> int:
    participant_id = session.participant_id(args.participant)
    result = session.engine.eliminate_participant(
        session.require_tournament(),
        participant_id,
        reason=args.reason or "",
        use_repechage=not args.no_repechage,
    )
    return session.apply(result, f"Eliminated {args.participant}")


def cmd_reinstate(session: ConsoleSession, args: argparse.Namespace) -> int:
    participant_id = session.participant_id(args.participant)
    result = session.engine.reinstate_participant(
        session.require_tournament(), participant_id
    )
    return session.apply(result, f"Reinstated {args.participant}")


def cmd_penalty(session: ConsoleSession, args: argparse.Namespace) -> int:
    participant_id = session.participant_id(args.participant)
    result = session.engine.add_penalty(
        session.require_tournament(), participant_id, args.points, " ".join(args.reason)
    )
    return session.apply(result, f"Penalty recorded for {args.participant}")


def cmd_unpenalize(session: ConsoleSession, args: argparse.Namespace) -> int:
    result = session.engine.remove_penalty(session.require_tournament(), args.penalty)
    return session.apply(result, "Penalty removed")


def cmd_standings(session: ConsoleSession, args: argparse.Namespace) -> int:
    tournament = session.require_tournament()
    tables = session.engine.standings(tournament)
    if not tables:
        print(f"{Colors.WARNING}No standings for {tournament.format}{Colors.ENDC}")
        return 0
    print_standings(tournament, tables)
    return 0


def cmd_matches(session: ConsoleSession, args: argparse.Namespace) -> int:
    print_matches(session.require_tournament(), args.round)
    return 0


def cmd_winner(session: ConsoleSession, args: argparse.Namespace) -> int:
    tournament = session.require_tournament()
    print(f"{tournament.name}: {tournament.status}")
    winner = tournament.winner_id or session.engine.resolve_winner(tournament)
    if winner is not None:
        label = "Champion" if tournament.winner_id else "Leader"
        name = tournament.participant_name(winner)
        print(f"{Colors.OKGREEN}{label}: {name}{Colors.ENDC}")
        return 0
    ties = session.engine.tie_set(tournament)
    if ties:
        names = ", ".join(tournament.participant_name(pid) for pid in ties)
        print(f"{Colors.WARNING}Tied for first: {names}{Colors.ENDC}")
    else:
        print("No winner yet")
    return 0


def cmd_select_winner(session: ConsoleSession, args: argparse.Namespace) -> int:
    participant_id = session.participant_id(args.participant)
    result = session.engine.select_winner(session.require_tournament(), participant_id)
    return session.apply(result, f"{args.participant} selected as champion")


def cmd_events(session: ConsoleSession, args: argparse.Namespace) -> int:
    tournament = session.require_tournament()
    for event in tournament.events[-args.limit :]:
        stamp = event.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        print(f"  {stamp}  {event.type:<22} {event.description}")
    return 0


def cmd_help(session: ConsoleSession, args: argparse.Namespace) -> int:
    if args.topic:
        print_command_help(args.topic)
    else:
        print_commands_list()
    return 0


# ========== Parsers ==========


def add_command_parsers(subparsers) -> None:
    """Register every command on ``subparsers``."""
    new_parser = subparsers.add_parser("new", help="Create a tournament")
    new_parser.add_argument("name")
    new_parser.add_argument(
        "--format", choices=ALL_FORMATS, default=FORMAT_SINGLE_ELIMINATION
    )
    new_parser.add_argument("--seeding", choices=SEEDING_MODES)
    new_parser.add_argument("--groups", type=int)
    new_parser.add_argument("--swiss-rounds", type=swiss_rounds_arg)
    new_parser.add_argument("--best-of", type=int)
    new_parser.add_argument("--best-of-final", type=int)
    new_parser.add_argument("--home-and-away", action="store_true")
    new_parser.add_argument("--low-score-wins", action="store_true")
    new_parser.add_argument("--head-to-head", action="store_true")
    new_parser.add_argument("--allow-rematches", action="store_true")
    new_parser.add_argument("--participants", nargs="*")
    new_parser.set_defaults(func=cmd_new)

    add_parser = subparsers.add_parser("add", help="Register a participant")
    add_parser.add_argument("name")
    add_parser.add_argument("--seed", type=int)
    add_parser.set_defaults(func=cmd_add)

    swap_parser = subparsers.add_parser("swap-seeds", help="Exchange two seeds")
    swap_parser.add_argument("first")
    swap_parser.add_argument("second")
    swap_parser.set_defaults(func=cmd_swap_seeds)

    gen_parser = subparsers.add_parser("generate", help="Generate the bracket")
    gen_parser.add_argument("--seed", type=int)
    gen_parser.set_defaults(func=cmd_generate)

    start_parser = subparsers.add_parser("start", help="Start the tournament")
    start_parser.set_defaults(func=cmd_start)

    result_parser = subparsers.add_parser("result", help="Record a match result")
    result_parser.add_argument("match")
    result_parser.add_argument("score1", type=score_arg)
    result_parser.add_argument("score2", type=score_arg)
    result_parser.add_argument("--winner")
    result_parser.add_argument("--games", type=games_arg)
    result_parser.add_argument("--partial", action="store_true")
    result_parser.add_argument("--reason")
    result_parser.set_defaults(func=cmd_result)

    next_parser = subparsers.add_parser("next-round", help="Pair the next Swiss round")
    next_parser.set_defaults(func=cmd_next_round)

    elim_parser = subparsers.add_parser("eliminate", help="Eliminate a participant")
    elim_parser.add_argument("participant")
    elim_parser.add_argument("--reason")
    elim_parser.add_argument("--no-repechage", action="store_true")
    elim_parser.set_defaults(func=cmd_eliminate)

    reinstate_parser = subparsers.add_parser("reinstate", help="Undo an elimination")
    reinstate_parser.add_argument("participant")
    reinstate_parser.set_defaults(func=cmd_reinstate)

    penalty_parser = subparsers.add_parser("penalty", help="Deduct points")
    penalty_parser.add_argument("participant")
    penalty_parser.add_argument("points", type=score_arg)
    penalty_parser.add_argument("reason", nargs="+")
    penalty_parser.set_defaults(func=cmd_penalty)

    unpenalize_parser = subparsers.add_parser("unpenalize", help="Remove a penalty")
    unpenalize_parser.add_argument("penalty")
    unpenalize_parser.set_defaults(func=cmd_unpenalize)

    standings_parser = subparsers.add_parser("standings", help="Show the standings")
    standings_parser.set_defaults(func=cmd_standings)

    matches_parser = subparsers.add_parser("matches", help="List matches")
    matches_parser.add_argument("--round", type=int)
    matches_parser.set_defaults(func=cmd_matches)

    winner_parser = subparsers.add_parser("winner", help="Show the champion")
    winner_parser.set_defaults(func=cmd_winner)

    select_parser = subparsers.add_parser("select-winner", help="Settle a tie")
    select_parser.add_argument("participant")
    select_parser.set_defaults(func=cmd_select_winner)

    events_parser = subparsers.add_parser("events", help="Show the event log")
    events_parser.add_argument("--limit", type=int, default=20)
    events_parser.set_defaults(func=cmd_events)

    help_parser = subparsers.add_parser("help", help="Show help for a command")
    help_parser.add_argument("topic", nargs="?")
    help_parser.set_defaults(func=cmd_help)


def create_command_parser() -> argparse.ArgumentParser:
    """Parser for one line typed in interactive mode."""
    parser = argparse.ArgumentParser(prog="bracketry>", add_help=False)
    subparsers = parser.add_subparsers(dest="command")
    add_command_parsers(subparsers)
    return parser


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="bracketry",
        description="Tournament brackets, standings and champions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  bracketry -f cup.json

  # Create a Swiss tournament and pair round 1
  bracketry -f cup.json new "Club Swiss" --format swiss --participants A B C D
  bracketry -f cup.json generate --seed 7

  # Record a result and pair the next round
  bracketry -f cup.json result 1.0 1 0
  bracketry -f cup.json next-round
        """,
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )
    parser.add_argument(
        "--file", "-f", default=DEFAULT_FILE, help="Tournament snapshot file"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log engine decisions"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    add_command_parsers(subparsers)
    return parser


# ========== Modes ==========


def execute(session: ConsoleSession, args: argparse.Namespace) -> int:
    """Run one parsed command, reporting engine errors instead of raising."""
    try:
        return args.func(session, args)
    except BracketryException as exc:
        print(f"{Colors.FAIL}Error: {exc}{Colors.ENDC}")
        logger.error(f"Command {args.command} failed: {exc}")
        return 1


def run_standard_mode(args: argparse.Namespace) -> int:
    """Run in standard CLI mode (non-interactive)."""
    session = ConsoleSession(args.file)
    if args.command not in ("new", "help"):
        try:
            session.load()
        except SnapshotLoadException as exc:
            print(f"{Colors.FAIL}Error: {exc}{Colors.ENDC}")
            logger.error(f"Could not load {args.file}: {exc}")
            return 1
    return execute(session, args)


def run_interactive_mode(path: Union[str, Path]) -> int:
    """Run in interactive mode with autocomplete."""
    sync = DebouncedSync(lambda snapshot: JsonSnapshotStore.write_path(path, snapshot))
    session = ConsoleSession(path, sync=sync)
    if session.path.exists():
        try:
            tournament = session.load()
            print(f"Loaded {tournament.name} ({tournament.status}) from {path}")
        except SnapshotLoadException as exc:
            print(f"{Colors.WARNING}Could not load {path}: {exc}{Colors.ENDC}")

    print_banner()

    style = Style.from_dict(
        {
            "prompt": "#00aa00 bold",
        }
    )
    prompt_session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )
    parser = create_command_parser()

    try:
        while True:
            try:
                user_input = prompt_session.prompt("bracketry> ").strip()
            except KeyboardInterrupt:
                print(f"\n{Colors.WARNING}Use 'exit' to leave{Colors.ENDC}")
                continue
            except EOFError:
                break

            if not user_input:
                continue
            if user_input in ["exit", "quit", "q"]:
                break
            if user_input in ["?", "/help"]:
                print_commands_list()
                continue

            try:
                args = parser.parse_args(shlex.split(user_input))
            except ValueError as exc:
                print(f"{Colors.FAIL}Error: {exc}{Colors.ENDC}")
                continue
            except SystemExit:
                # argparse calls sys.exit on error, catch it
                continue
            if args.command is None:
                print_commands_list()
                continue
            execute(session, args)
    finally:
        sync.flush()
        for warning in sync.pending_warnings():
            print(f"{Colors.WARNING}Warning: {warning}{Colors.ENDC}")

    print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the bracketry CLI."""
    args = create_main_parser().parse_args(argv)
    if args.verbose:
        setup_logger(LOGGER_ROOT, "DEBUG")

    # If no command, start interactive mode
    if args.interactive or args.command is None:
        return run_interactive_mode(args.file)
    return run_standard_mode(args)


if __name__ == "__main__":
    sys.exit(main())
