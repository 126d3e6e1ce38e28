#!/usr/bin/env python3
"""Terminal browser for the level catalog and creator leaderboards.

Usage:
    python browse.py                          # points leaderboard
    python browse.py leaderboard speedrun     # leaderboard for one criterion
    python browse.py creator alice            # a creator's page
    python browse.py levels hard --sort rated # a category list
    python browse.py --diagnostics            # data-integrity findings only

Feeds come from the same settings as the API (URLs or local paths).
No server or Redis needed.
"""

import argparse
import sys

import requests

from levelboard.config import settings
from levelboard.core.errors import DatasetLoadError, Diagnostic, LevelboardError
from levelboard.core.pipeline import Snapshot
from levelboard.core.rating import rank
from levelboard.models.creator import RankingCriterion
from levelboard.models.level import Category
from levelboard.models.profile import PROFILE_CATEGORY
from levelboard.services.catalog_service import LevelSort, catalog_service
from levelboard.services.dataset_service import (
    assemble_snapshot,
    decode_feed,
    is_remote,
    read_local_feed,
)
from levelboard.services.profile_service import profile_service

# --- ANSI Colors ---
TIER_COLORS = {
    "normal": "\033[97m",
    "epic": "\033[95m",
    "legendary": "\033[93m",
    "mythic": "\033[91m",
}

DIVIDER = "\033[90m" + "─" * 60 + "\033[0m"
RESET = "\033[0m"
DIM = "\033[90m"
BOLD = "\033[1m"
YELLOW = "\033[93m"
RED = "\033[91m"


# =============================================================
# Loading
# =============================================================

def fetch_feed(source: str):
    """Decode a feed from a URL (requests) or a local path."""
    if not is_remote(source):
        return read_local_feed(source)
    try:
        resp = requests.get(source, timeout=settings.FETCH_TIMEOUT)
        resp.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise DatasetLoadError(source, str(e)) from e
    return decode_feed(source, resp.text)


def load_snapshot() -> Snapshot:
    speedrun_raw = fetch_feed(settings.SPEEDRUN_LEVELS_SOURCE)
    hard_raw = fetch_feed(settings.HARD_LEVELS_SOURCE)

    profiles_raw = None
    extra = []
    if settings.PROFILES_SOURCE:
        try:
            profiles_raw = fetch_feed(settings.PROFILES_SOURCE)
        except DatasetLoadError as e:
            extra.append(Diagnostic.warning(PROFILE_CATEGORY, e.reason))

    return assemble_snapshot(speedrun_raw, hard_raw, profiles_raw, extra_diagnostics=extra)


# =============================================================
# Display
# =============================================================

def format_tier(total: float) -> str:
    tier = rank(total)
    if tier is None:
        return f"{DIM}unranked{RESET}"
    return f"{TIER_COLORS[tier.value]}{tier.value}{RESET}"


def format_position(position: int | None) -> str:
    return f"#{position}" if position is not None else f"{DIM}unranked{RESET}"


def header(title: str, subtitle: str = ""):
    print()
    print(f"{BOLD}" + "=" * 60 + f"{RESET}")
    print(f"{BOLD}  {title}{RESET}")
    if subtitle:
        print(f"  {DIM}{subtitle}{RESET}")
    print(f"{BOLD}" + "=" * 60 + f"{RESET}")


def show_leaderboard(snapshot: Snapshot, criterion: RankingCriterion, limit: int | None):
    header(f"Leaderboard - {criterion.value}", f"{len(snapshot.ordering(criterion))} ranked creators")
    for stats in catalog_service.leaderboard(snapshot, criterion, limit):
        print(
            f"  {YELLOW}#{stats.position(criterion):<4}{RESET} {BOLD}{stats.name:<24}{RESET}"
            f" points {stats.total_points:6.1f} | levels {stats.total_levels:3d}"
            f" (speedrun {stats.speedrun_count}, hard {stats.hard_count})"
        )
    print()


def show_levels(snapshot: Snapshot, levels):
    for level in levels:
        total = snapshot.total_rating(level)
        created = level.created.date().isoformat() if level.created else "?"
        print(
            f"  {BOLD}{level.name:<28}{RESET} {level.category.value:<8} by {level.creator:<16}"
            f" {DIM}{created}{RESET}  {total:5.1f}  {format_tier(total)}"
        )


def show_category(snapshot: Snapshot, category: Category, search: str, sort: LevelSort):
    levels = catalog_service.browse(snapshot, category, search, sort)
    header(f"{category.value.capitalize()} levels", f"{len(levels)} shown, sorted by {sort.value}")
    show_levels(snapshot, levels)
    print()


def show_creator(snapshot: Snapshot, name: str, search: str, sort: LevelSort) -> bool:
    stats = snapshot.creator(name)
    if stats is None:
        print(f"{RED}Creator not found: {name}{RESET}")
        return False

    profile = profile_service.resolve(snapshot.profiles, name)
    header(name, f"avatar {profile.avatar} | banner {profile.banner}")
    print(f"  Total points: {stats.total_points:.1f}")
    print(f"  Levels: {stats.total_levels} (speedrun {stats.speedrun_count}, hard {stats.hard_count})")
    for criterion in RankingCriterion:
        print(f"  Position ({criterion.value}): {format_position(stats.position(criterion))}")
    print(DIVIDER)
    show_levels(snapshot, catalog_service.creator_levels(snapshot, stats, search, sort))
    print()
    return True


def show_diagnostics(snapshot: Snapshot):
    header("Diagnostics", f"{len(snapshot.diagnostics)} findings")
    for d in snapshot.diagnostics:
        color = RED if d.is_error else YELLOW
        where = f" level {d.level_id}" if d.level_id else ""
        print(f"  {color}[{d.severity}]{RESET} {d.category}{where}: {d.message}")
    print()


# =============================================================
# Main
# =============================================================

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Browse levels and creator leaderboards.")
    ap.add_argument("view", nargs="?", default="leaderboard", choices=["leaderboard", "creator", "levels"])
    ap.add_argument("target", nargs="?", help="criterion, creator name or category")
    ap.add_argument("--search", default="", help="filter levels by name (and creator on category lists)")
    ap.add_argument("--sort", default="recent", choices=[s.value for s in LevelSort])
    ap.add_argument("--limit", type=int, default=None, help="leaderboard rows to show")
    ap.add_argument("--diagnostics", action="store_true", help="only print data-integrity findings")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    snapshot = load_snapshot()

    if args.diagnostics:
        show_diagnostics(snapshot)
        return 0

    sort = LevelSort(args.sort)
    if args.view == "creator":
        if not args.target:
            print(f"{RED}Which creator? e.g. python browse.py creator alice{RESET}")
            return 2
        return 0 if show_creator(snapshot, args.target, args.search, sort) else 1
    if args.view == "levels":
        show_category(snapshot, Category(args.target or "speedrun"), args.search, sort)
        return 0

    show_leaderboard(snapshot, RankingCriterion(args.target or "points"), args.limit)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print(f"\n{DIM}Bye.{RESET}")
    except (LevelboardError, ValueError) as e:
        print(f"{RED}{e}{RESET}")
        sys.exit(1)
