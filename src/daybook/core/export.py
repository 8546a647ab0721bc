"""iCalendar export - pure string formatting."""

from .events import Event

PRODID = "-//Daybook//EN"


def _stamp(event: Event, which: str) -> str:
    moment = event.start_at if which == "start" else event.end_at
    return moment.strftime("%Y%m%dT%H%M%S")


def to_ical(events: list[Event]) -> str:
    """Serialize events as a VCALENDAR document with CRLF line endings."""
    lines = ["BEGIN:VCALENDAR", "VERSION:2.0", f"PRODID:{PRODID}"]

    for event in events:
        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:{event.id}@daybook")
        lines.append(f"DTSTART:{_stamp(event, 'start')}")
        lines.append(f"DTEND:{_stamp(event, 'end')}")
        lines.append(f"SUMMARY:{event.title}")
        if event.description:
            lines.append(f"DESCRIPTION:{event.description}")
        lines.append("END:VEVENT")

    lines.append("END:VCALENDAR")
    return "\r\n".join(lines)
