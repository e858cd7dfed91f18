"""Player-facing view of the world for the current day."""

from __future__ import annotations

from typing import TYPE_CHECKING

from clanquest.core.rules import default_rules

if TYPE_CHECKING:
    from clanquest.core.rules import RuleBook
    from clanquest.core.world_state import WorldState


def look(world: WorldState, player_id: str, rules: RuleBook | None = None) -> str:
    """Markdown text describing what *player_id* can see today."""
    player = world.players.get(player_id)
    if player is None:
        return "You have not joined the world yet. Create a character first."
    clan = world.clans.get(player.clan_id)
    if clan is None:
        return f"You belong to no known clan (ClanID: {player.clan_id}). Something is wrong."

    home = world.home_of(clan.id)
    rules = rules or default_rules()
    lines = [f"**[Day {world.day} | {home.name if home else clan.name}]**", ""]
    if home and home.description:
        lines += [home.description, ""]

    lines.append(f"**{player.name}** the {player.player_class.value}, "
                 f"level {player.level} ({player.xp} xp)")
    if player.titles:
        names = [(rules.title(t).name if rules.title(t) else t) for t in player.titles]
        lines.append(f"Titles: {', '.join(names)}")
    lines.append("")

    lines.append(f"**{clan.name}**")
    if clan.defeated:
        conqueror = world.clans.get(clan.defeated_by)
        lines.append(f"- Conquered by {conqueror.name if conqueror else clan.defeated_by}")
    lines.append(f"- Food: {clan.food} | Wood: {clan.wood} | Gold: {clan.gold}")
    lines.append("")

    lines.append("**Clanmates**")
    mates = [p for p in world.members(clan.id) if p.id != player.id]
    if mates:
        lines.extend(f"- @{p.name} ({p.player_class.value}, lv {p.level})" for p in mates)
    else:
        lines.append("- (no one else)")
    lines.append("")

    lines.append("**World**")
    if world.active_boss is not None:
        boss = world.active_boss
        name = rules.boss(boss.boss_id).name
        where = world.locations.get(boss.location_id)
        lines.append(
            f"- {name} prowls {where.name if where else boss.location_id} "
            f"until day {boss.expires_on} ({len(boss.participants)} hunters)"
        )
    for mod in world.location_modifiers:
        where = world.locations.get(mod.location_id)
        text = mod.messages[0] if mod.messages else mod.type.value.title()
        lines.append(f"- {where.name if where else mod.location_id}: {text}")
    if world.active_boss is None and not world.location_modifiers:
        lines.append("- All is calm.")

    return "\n".join(lines).rstrip() + "\n"
