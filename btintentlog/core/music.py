"""Log layout for broadcasts sent by the stock music player."""

from __future__ import annotations

from btintentlog.core.model import BroadcastEvent, ExtraValue, Short, platform_type_name


def format_music_event(event: BroadcastEvent) -> list[str]:
    lines = [f"Action: {event.action}"]
    if not event.extras:
        return lines

    for key, value in event.extras.items():
        if value is None:
            continue
        type_name = platform_type_name(value)
        lines.append(f'  Extra: "{key}"   Type: {type_name}   Value: {_render(value, type_name)}')
    return lines


def _render(value: ExtraValue, type_name: str | None) -> str:
    # Music extras carry no documented constants; only scalars are shown.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, int) and not isinstance(value, Short):
        return str(int(value))
    return f"(not parsed, type = {type_name})"
