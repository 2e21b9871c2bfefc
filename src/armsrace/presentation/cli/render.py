"""Shared CLI rendering helpers."""
from __future__ import annotations

from typing import Iterable, List

from colorama import Fore, Style

from armsrace.domain.defs import WeaponDef
from armsrace.domain.weapon import WeaponInstance
from armsrace.services.game_service import GameEvent, GameFinishedEvent, RoundStartedEvent
from armsrace.services.profile_service import ProfileStatistics
from armsrace.services.round_service import (
    OpponentSelectedEvent,
    RoundActionFailedEvent,
    RoundEvent,
    RoundEventTriggeredEvent,
    RoundResolvedEvent,
    WeaponPurchasedEvent,
    WeaponSoldEvent,
)
from armsrace.services.shop_service import ShopActionFailedEvent, ShopEvent, ShopPurchaseEvent, ShopView
from armsrace.services.simulation_service import SimulationReport

RULE_WIDTH = 60
_OUTCOME_LABELS = {"win": "You win the round!", "loss": "Computer wins the round.", "draw": "Draw."}
_RESULT_LABELS = {"win": "Congratulations!", "loss": "Better luck next time.", "draw": "It's a tie."}

TITLE_COLOR = Style.BRIGHT + Fore.BLUE
_OUTCOME_COLORS = {"win": Fore.GREEN, "loss": Fore.RED, "draw": Fore.YELLOW}

_color_enabled = True

HELP_LINES = (
    "How to play",
    "Each game runs over several rounds. Before the first round you pick a perk",
    "that stays active for the whole game.",
    "Every round you may buy attachments, then buy one weapon from the round's",
    "pool. The computer picks its own weapon; harder difficulties favour",
    "stronger weapons. A random event may change both weapons.",
    "The higher balanced score wins the round:",
    "  (damage * fire_rate + magazine * range) / (falloff + recoil)",
    "Wins and losses pay a bonus, and you may sell your weapon after the round.",
    "Difficulty, events and colors can be changed under Options.",
)


def set_color_enabled(enabled: bool) -> None:
    global _color_enabled
    _color_enabled = enabled


def colorize(text: str, color: str) -> str:
    """Wrap ``text`` in an ANSI color unless colored output is switched off."""
    if not _color_enabled or not color:
        return text
    return f"{color}{text}{Style.RESET_ALL}"


def rule(char: str = "=") -> str:
    return char * RULE_WIDTH


def format_weapon_line(index: int, weapon: WeaponDef, price: int, balance: int) -> str:
    instance = WeaponInstance.from_def(weapon)
    status = "affordable" if price <= balance else "too expensive"
    return f"{index:2d}. {weapon.name:<15} - ${price:<6d} (DPS: {instance.dps:.1f}) ({status})"


def format_catalog(weapons: Iterable[WeaponInstance]) -> List[str]:
    header = f"{'Name':<15} {'Category':<9} {'Price':>6} {'Score':>9} {'DPS':>7}"
    lines = [header, rule("-")]
    for weapon in weapons:
        lines.append(
            f"{weapon.name:<15} {weapon.category:<9} {weapon.price:>6d} "
            f"{weapon.balanced_score:>9.2f} {weapon.dps:>7.2f}"
        )
    return lines


def format_shop(view: ShopView) -> List[str]:
    lines = [f"Balance: ${view.balance}"]
    for index, entry in enumerate(view.entries, start=1):
        owned = f" (owned x{entry.owned})" if entry.owned else ""
        lines.append(f"{index}. {entry.name} - ${entry.price}{owned}")
    lines.append("0. Finish shopping")
    return lines


def format_events(events: Iterable[RoundEvent | GameEvent | ShopEvent]) -> List[str]:
    lines: List[str] = []
    for event in events:
        start = len(lines)
        if isinstance(event, RoundStartedEvent):
            lines.append(f"=== Round {event.round_number} ===")
            if event.bonus:
                lines.append(f"Round bonus: +${event.bonus}")
            lines.append(f"Balance: ${event.balance}")
        elif isinstance(event, WeaponPurchasedEvent):
            lines.append(f"Bought {event.weapon_name} for ${event.price}. Balance: ${event.balance}")
        elif isinstance(event, OpponentSelectedEvent):
            lines.append(f"Computer picked {event.weapon_name}.")
        elif isinstance(event, RoundEventTriggeredEvent):
            lines.append(f"Event: {event.event_name}!")
        elif isinstance(event, RoundResolvedEvent):
            lines.extend(_format_resolution(event.player_weapon, event.computer_weapon))
            lines.append(_OUTCOME_LABELS[event.outcome])
            if event.bonus:
                lines.append(f"Bonus: +${event.bonus}")
        elif isinstance(event, WeaponSoldEvent):
            lines.append(f"Sold {event.weapon_name} for ${event.amount}. Balance: ${event.balance}")
        elif isinstance(event, ShopPurchaseEvent):
            lines.append(f"Bought {event.attachment_name}. Balance: ${event.balance}")
        elif isinstance(event, (RoundActionFailedEvent, ShopActionFailedEvent)):
            lines.append(event.message)
        elif isinstance(event, GameFinishedEvent):
            lines.append(rule())
            lines.append(f"Final score: You {event.player_score} - {event.computer_score} Computer")
            lines.append(_RESULT_LABELS[event.result])
            for achievement in event.unlocked_achievements:
                lines.append(f"Achievement unlocked: {achievement}")
        lines[start:] = [colorize(line, event_color(event)) for line in lines[start:]]
    return lines


def format_statistics(stats: ProfileStatistics) -> List[str]:
    lines = [
        f"Games: {stats.total_games}",
        f"Wins: {stats.wins}  Losses: {stats.losses}  Draws: {stats.draws}",
        f"Win rate: {stats.win_rate}%",
    ]
    if stats.most_used_weapon is not None:
        name, count = stats.most_used_weapon
        lines.append(f"Most used weapon: {name} ({count})")
    if stats.top_weapons_by_wins:
        lines.append("Top weapons by wins:")
        lines.extend(f"  {name}: {wins}" for name, wins in stats.top_weapons_by_wins)
    if stats.top_weapons_by_elo:
        lines.append("Top weapons by ELO:")
        lines.extend(f"  {name}: {elo}" for name, elo in stats.top_weapons_by_elo)
    lines.append("Achievements: " + (", ".join(stats.achievements) if stats.achievements else "none yet"))
    return lines


def format_simulation(report: SimulationReport) -> List[str]:
    lines = [f"Simulated {report.battles} battles over {report.iterations} iterations.", rule()]
    lines.extend(f"{row.weapon_name:<15} {row.win_rate:5.1f}%" for row in report.rows)
    return lines


def _format_resolution(player: WeaponInstance, computer: WeaponInstance) -> List[str]:
    return [
        f"You: {player.name} (score {player.balanced_score:.2f})",
        f"Computer: {computer.name} (score {computer.balanced_score:.2f})",
        rule("-"),
    ]


def event_color(event: RoundEvent | GameEvent | ShopEvent) -> str:
    if isinstance(event, (RoundActionFailedEvent, ShopActionFailedEvent)):
        return Fore.RED
    if isinstance(event, (WeaponPurchasedEvent, ShopPurchaseEvent, WeaponSoldEvent)):
        return Fore.GREEN
    if isinstance(event, (RoundStartedEvent, RoundEventTriggeredEvent)):
        return Fore.CYAN
    if isinstance(event, OpponentSelectedEvent):
        return Fore.MAGENTA
    if isinstance(event, RoundResolvedEvent):
        return _OUTCOME_COLORS[event.outcome]
    if isinstance(event, GameFinishedEvent):
        return Style.BRIGHT + _OUTCOME_COLORS[event.result]
    return ""


def format_help() -> List[str]:
    return [colorize(HELP_LINES[0], TITLE_COLOR), rule(), *HELP_LINES[1:]]


def format_options(difficulty: str, events_enabled: bool, colored_output: bool) -> List[str]:
    return [
        colorize("Options", TITLE_COLOR),
        rule(),
        f"1. Difficulty ({difficulty})",
        f"2. Random events ({_on_off(events_enabled)})",
        f"3. Colored output ({_on_off(colored_output)})",
        "4. Reset profile",
        "0. Back",
    ]


def _on_off(enabled: bool) -> str:
    return "enabled" if enabled else "disabled"
