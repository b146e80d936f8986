import time
from html import escape
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from logbook.schemas import LogEntry

DAY_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


class LogPageRenderer:
    """
    Renders log entries as one HTML page.

    Entries are expected newest first. A ``<p>YYYY-MM-DD</p>`` separator is
    written before the first entry of every calendar day, where the day is
    taken in the display timezone. Content is HTML-escaped.
    """

    def __init__(self, owner_name: str, timezone_name: str):
        self.owner_name = owner_name
        self.timezone_name = timezone_name
        self.tz = ZoneInfo(timezone_name)

    def generate_html(self, entries: Sequence[LogEntry], started: Optional[float] = None) -> str:
        """Build the page; ``started`` is a perf_counter() reading taken before the fetch."""
        if started is None:
            started = time.perf_counter()
        owner = escape(self.owner_name)

        lines = [
            '<html lang="en">',
            "<head>",
            '<meta charset="UTF-8" />',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0" />',
            f"<title>{owner}'s Logs</title>",
            "</head>",
            "<body>",
            '<div style="max-width: 960px; margin: 0 auto;">',
            f"<p><strong>{owner}'s Logs</strong></p>",
            f"<p>Current TZ: {escape(self.timezone_name)}.</p>",
            "<ul>",
        ]

        prev_day = None
        for entry in entries:
            ts = entry.timestamp.astimezone(self.tz)
            day = ts.date()
            if day != prev_day:
                lines.append(f"<p>{ts.strftime(DAY_FORMAT)}</p>")
                prev_day = day
            lines.append(f"<li>{ts.strftime(TIME_FORMAT)}: {escape(entry.content)}</li>")

        lines.append("</ul>")
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        lines.append(
            f'<p style="text-align: center;">Rendered {len(entries)} logs in {elapsed_ms} ms.</p>'
        )
        lines.extend(["</div>", "</body>", "</html>"])
        return "\n".join(lines) + "\n"
